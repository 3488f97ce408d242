# clubmanager/errors/trainer_errors.py

class TrainerError(Exception):
    """Base exception for trainer-related errors."""
    pass

class TrainerNotFound(TrainerError):
    """Raised when a trainer does not exist or is inactive."""
    pass

class InvalidHoursAdjustment(TrainerError):
    """Raised when adjusted hours are negative or the month is out of range."""
    pass
