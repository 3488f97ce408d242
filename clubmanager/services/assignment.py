import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from clubmanager.crud import athlete as athlete_crud
from clubmanager.crud import recurring_training as training_crud
from clubmanager.crud import trainer as trainer_crud
from clubmanager.crud import training_session as session_crud
from clubmanager.database import transactional
from clubmanager.errors.assignment_errors import (
    AssignmentConflict,
    AssignmentNotFound,
    AthleteNotFound,
    TrainingGroupNotFound,
)
from clubmanager.errors.session_errors import SessionNotFound
from clubmanager.errors.trainer_errors import TrainerNotFound
from clubmanager.models import (
    RecurringTrainingAthleteAssignment,
    RecurringTrainingTrainerAssignment,
    SessionAthleteAssignment,
)
from clubmanager.validators.training_assignments import TrainingAssignmentValidator

logger = logging.getLogger(__name__)


class AssignmentService:
    """
    Writes group assignments. Validation and the write share one
    transaction so that the checked state is the state that gets written.
    """

    def __init__(self, db: Session):
        self.db = db

    def assign_athlete(
        self, group_id: str, athlete_id: str, assigned_by: Optional[str] = None
    ) -> Tuple[RecurringTrainingAthleteAssignment, List[str]]:
        """
        Returns the new assignment and the validator warnings.

        Raises:
            AthleteNotFound: unknown athlete.
            AssignmentConflict: the validator reported hard errors.
        """
        if not athlete_crud.get_athlete(self.db, athlete_id):
            raise AthleteNotFound("Athlete not found")

        with transactional(self.db) as session:
            result = TrainingAssignmentValidator(session).validate_assignment(athlete_id, group_id)
            if not result.is_valid:
                raise AssignmentConflict(result.errors, result.warnings)

            assignment = training_crud.create_athlete_assignment(session, group_id, athlete_id, assigned_by)

        logger.info(f"Athlete {athlete_id} assigned to group {group_id} ({len(result.warnings)} warnings)")
        return assignment, result.warnings

    def remove_athlete(self, group_id: str, athlete_id: str) -> None:
        assignment = training_crud.get_athlete_assignment(self.db, group_id, athlete_id)
        if not assignment:
            raise AssignmentNotFound("Athlete is not assigned to this group")

        with transactional(self.db) as session:
            training_crud.delete_athlete_assignment(session, assignment)
        logger.info(f"Athlete {athlete_id} removed from group {group_id}")

    def reassign_athlete_for_session(
        self,
        session_id: str,
        athlete_id: str,
        target_group_id: str,
        assigned_by: Optional[str] = None,
    ) -> Tuple[SessionAthleteAssignment, List[str]]:
        """
        Move an athlete into another group for a single session only.

        Raises:
            SessionNotFound, AthleteNotFound,
            AssignmentConflict: the target group is not part of the session.
        """
        if not session_crud.get_session(self.db, session_id):
            raise SessionNotFound("Training session not found")
        if not athlete_crud.get_athlete(self.db, athlete_id):
            raise AthleteNotFound("Athlete not found")

        with transactional(self.db) as session:
            result = TrainingAssignmentValidator(session).validate_session_reassignment(
                athlete_id, session_id, target_group_id
            )
            if not result.is_valid:
                raise AssignmentConflict(result.errors, result.warnings)

            session_group = session_crud.get_session_group(session, session_id, target_group_id)
            reassignment = session_crud.upsert_session_reassignment(
                session, session_id, athlete_id, session_group.id, assigned_by
            )

        return reassignment, result.warnings

    def assign_trainer(
        self, group_id: str, trainer_id: str, is_primary: bool = False
    ) -> Tuple[RecurringTrainingTrainerAssignment, List[str]]:
        if not training_crud.get_training_group(self.db, group_id):
            raise TrainingGroupNotFound("Training group not found")
        if not trainer_crud.get_active_trainer(self.db, trainer_id):
            raise TrainerNotFound("Trainer not found")
        if training_crud.get_trainer_assignment(self.db, group_id, trainer_id):
            raise AssignmentConflict(["Trainer is already assigned to this group"])

        with transactional(self.db) as session:
            assignment = training_crud.create_trainer_assignment(session, group_id, trainer_id, is_primary)

        return assignment, []

    def remove_trainer(self, group_id: str, trainer_id: str) -> List[str]:
        """Returns a warning when the group is left without trainers."""
        assignment = training_crud.get_trainer_assignment(self.db, group_id, trainer_id)
        if not assignment:
            raise AssignmentNotFound("Trainer is not assigned to this group")

        with transactional(self.db) as session:
            training_crud.delete_trainer_assignment(session, assignment)
            result = TrainingAssignmentValidator(session).validate_trainer_assignment(group_id)

        return result.warnings
