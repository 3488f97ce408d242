"""
Business rules for athlete and trainer assignments to training groups.

An athlete may belong to several groups across different recurring
trainings, but to at most one group per recurring training. Groups of
different trainings that share a weekday and overlap in time only produce a
warning.

The validator never raises for rule violations: every outcome is returned as
a ``ValidationResult``. It only reads, so the caller is responsible for
performing the write (ideally in the same transaction).
"""
import logging
from itertools import combinations
from typing import List

from sqlalchemy.orm import Session

from clubmanager.crud import recurring_training as training_crud
from clubmanager.crud import training_session as session_crud
from clubmanager.models import DayOfWeek
from clubmanager.models.recurring_training import DAY_OF_WEEK_TO_NUMBER
from clubmanager.schemas.validation import ValidationResult, GroupConflict, AssignmentSummaryItem
from clubmanager.utils.time_slots import times_overlap, format_slot

logger = logging.getLogger(__name__)


def _day_value(day) -> str:
    return day.value if isinstance(day, DayOfWeek) else str(day)


class TrainingAssignmentValidator:
    def __init__(self, db: Session):
        self.db = db

    def validate_assignment(self, athlete_id: str, new_group_id: str) -> ValidationResult:
        """
        Check whether an athlete can be assigned to a training group.

        Returns:
            ValidationResult, ``is_valid`` is False when the group does not
            exist or the athlete already is in a group of the same training.
        """
        result = ValidationResult()

        new_group = training_crud.get_training_group(self.db, new_group_id)
        if not new_group:
            result.add_error("Training group not found")
            return result

        new_training = new_group.recurring_training
        existing_assignments = training_crud.get_athlete_assignments(self.db, athlete_id)

        for assignment in existing_assignments:
            existing_group = assignment.training_group
            existing_training = existing_group.recurring_training

            if existing_training.id == new_training.id:
                result.add_error(
                    f'Athlete is already assigned to group "{existing_group.name}" in this training session. '
                    f"They cannot be in multiple groups for the same session."
                )
                continue

            if existing_training.day_of_week != new_training.day_of_week:
                continue

            if times_overlap(
                existing_training.start_time,
                existing_training.end_time,
                new_training.start_time,
                new_training.end_time,
            ):
                result.add_warning(
                    f'Warning: Athlete is already assigned to "{existing_group.name}" '
                    f"on {_day_value(existing_training.day_of_week)} from {existing_training.start_time} "
                    f"to {existing_training.end_time}. This overlaps with the new assignment "
                    f"({new_training.start_time} - {new_training.end_time})."
                )

        if not result.is_valid:
            logger.info(f"Assignment of athlete {athlete_id} to group {new_group_id} rejected: {result.errors}")
        return result

    def get_all_conflicts(self, athlete_id: str) -> List[GroupConflict]:
        """
        List every conflicting pair among the athlete's current assignments.

        Used to audit existing data, not to block writes.
        """
        assignments = training_crud.get_athlete_assignments(self.db, athlete_id)
        conflicts: List[GroupConflict] = []

        for first, second in combinations(assignments, 2):
            group1, group2 = first.training_group, second.training_group
            training1, training2 = group1.recurring_training, group2.recurring_training

            if training1.id == training2.id:
                conflicts.append(GroupConflict(
                    group1=group1.name,
                    group2=group2.name,
                    training=training1.name,
                    day_of_week=_day_value(training1.day_of_week),
                    time=format_slot(training1.start_time, training1.end_time),
                ))
            elif training1.day_of_week == training2.day_of_week and times_overlap(
                training1.start_time, training1.end_time, training2.start_time, training2.end_time
            ):
                conflicts.append(GroupConflict(
                    group1=group1.name,
                    group2=group2.name,
                    training=f"{training1.name} & {training2.name}",
                    day_of_week=_day_value(training1.day_of_week),
                    time=(
                        f"{training1.start_time}-{training1.end_time} overlaps "
                        f"{training2.start_time}-{training2.end_time}"
                    ),
                ))

        return conflicts

    def validate_session_reassignment(
        self, athlete_id: str, session_id: str, target_group_id: str
    ) -> ValidationResult:
        """One-off move of an athlete into another group of a single session."""
        result = ValidationResult()

        if session_crud.get_session_reassignment(self.db, session_id, athlete_id):
            result.add_warning(
                "This athlete has already been moved in this session. "
                "The previous reassignment will be replaced."
            )

        if not session_crud.get_session_group(self.db, session_id, target_group_id):
            result.add_error("Target group does not exist in this session")

        return result

    def validate_trainer_assignment(self, group_id: str) -> ValidationResult:
        result = ValidationResult()
        if training_crud.count_trainer_assignments(self.db, group_id) == 0:
            result.add_warning(
                "This group has no trainers assigned. It is recommended to assign at least one trainer."
            )
        return result

    def get_assignment_summary(self, athlete_id: str) -> List[AssignmentSummaryItem]:
        """Athlete's assignments ordered by weekday, then start time."""
        assignments = training_crud.get_athlete_assignments(self.db, athlete_id)
        assignments = sorted(
            assignments,
            key=lambda a: (
                DAY_OF_WEEK_TO_NUMBER[DayOfWeek(a.training_group.recurring_training.day_of_week)],
                a.training_group.recurring_training.start_time,
            ),
        )

        return [
            AssignmentSummaryItem(
                recurring_training_id=a.training_group.recurring_training.id,
                recurring_training_name=a.training_group.recurring_training.name,
                day_of_week=_day_value(a.training_group.recurring_training.day_of_week),
                time=format_slot(
                    a.training_group.recurring_training.start_time,
                    a.training_group.recurring_training.end_time,
                ),
                group_id=a.training_group.id,
                group_name=a.training_group.name,
            )
            for a in assignments
        ]
