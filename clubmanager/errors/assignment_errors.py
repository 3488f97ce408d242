# clubmanager/errors/assignment_errors.py
from typing import List, Optional


class AssignmentError(Exception):
    """Base exception for group assignment errors."""
    pass

class TrainingGroupNotFound(AssignmentError):
    """Raised when a training group does not exist."""
    pass

class AthleteNotFound(AssignmentError):
    """Raised when an athlete does not exist."""
    pass

class AssignmentNotFound(AssignmentError):
    """Raised when the assignment to remove does not exist."""
    pass

class AssignmentConflict(AssignmentError):
    """Raised when validation produced hard errors for an assignment."""

    def __init__(self, errors: List[str], warnings: Optional[List[str]] = None):
        super().__init__("; ".join(errors))
        self.errors = errors
        self.warnings = warnings or []
