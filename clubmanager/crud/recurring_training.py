from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from clubmanager.models import (
    RecurringTraining,
    TrainingGroup,
    RecurringTrainingAthleteAssignment,
    RecurringTrainingTrainerAssignment,
)


# Recurring trainings

def get_recurring_training(db: Session, training_id: str) -> Optional[RecurringTraining]:
    return (
        db.query(RecurringTraining)
        .options(selectinload(RecurringTraining.training_groups))
        .filter(RecurringTraining.id == training_id)
        .first()
    )


def get_active_recurring_trainings(db: Session) -> List[RecurringTraining]:
    return (
        db.query(RecurringTraining)
        .options(selectinload(RecurringTraining.training_groups))
        .filter(RecurringTraining.is_active.is_(True))
        .all()
    )


# Training groups

def get_training_group(db: Session, group_id: str) -> Optional[TrainingGroup]:
    """Group together with its parent recurring training."""
    return (
        db.query(TrainingGroup)
        .options(joinedload(TrainingGroup.recurring_training))
        .filter(TrainingGroup.id == group_id)
        .first()
    )


# Athlete assignments

def get_athlete_assignments(db: Session, athlete_id: str) -> List[RecurringTrainingAthleteAssignment]:
    """All persistent group assignments of an athlete with group and training loaded."""
    return (
        db.query(RecurringTrainingAthleteAssignment)
        .options(
            joinedload(RecurringTrainingAthleteAssignment.training_group)
            .joinedload(TrainingGroup.recurring_training)
        )
        .filter(RecurringTrainingAthleteAssignment.athlete_id == athlete_id)
        .order_by(RecurringTrainingAthleteAssignment.assigned_at, RecurringTrainingAthleteAssignment.id)
        .all()
    )


def get_athlete_assignment(
    db: Session, group_id: str, athlete_id: str
) -> Optional[RecurringTrainingAthleteAssignment]:
    return db.query(RecurringTrainingAthleteAssignment).filter(
        RecurringTrainingAthleteAssignment.training_group_id == group_id,
        RecurringTrainingAthleteAssignment.athlete_id == athlete_id,
    ).first()


def get_group_athlete_ids(db: Session, group_ids: List[str]) -> List[str]:
    if not group_ids:
        return []
    rows = (
        db.query(RecurringTrainingAthleteAssignment.athlete_id)
        .filter(RecurringTrainingAthleteAssignment.training_group_id.in_(group_ids))
        .distinct()
        .all()
    )
    return [athlete_id for athlete_id, in rows]


def create_athlete_assignment(
    db: Session, group_id: str, athlete_id: str, assigned_by: Optional[str] = None
) -> RecurringTrainingAthleteAssignment:
    """
    Adds the assignment and flushes.
    Business checks are expected to be done by the service layer.
    """
    assignment = RecurringTrainingAthleteAssignment(
        training_group_id=group_id,
        athlete_id=athlete_id,
        assigned_by=assigned_by,
    )
    db.add(assignment)
    db.flush()
    return assignment


def delete_athlete_assignment(db: Session, assignment: RecurringTrainingAthleteAssignment) -> None:
    db.delete(assignment)
    db.flush()


# Trainer assignments

def count_trainer_assignments(db: Session, group_id: str) -> int:
    return db.query(RecurringTrainingTrainerAssignment).filter(
        RecurringTrainingTrainerAssignment.training_group_id == group_id
    ).count()


def get_trainer_assignments_for_group(db: Session, group_id: str) -> List[RecurringTrainingTrainerAssignment]:
    return db.query(RecurringTrainingTrainerAssignment).filter(
        RecurringTrainingTrainerAssignment.training_group_id == group_id
    ).all()


def get_trainer_assignment(
    db: Session, group_id: str, trainer_id: str
) -> Optional[RecurringTrainingTrainerAssignment]:
    return db.query(RecurringTrainingTrainerAssignment).filter(
        RecurringTrainingTrainerAssignment.training_group_id == group_id,
        RecurringTrainingTrainerAssignment.trainer_id == trainer_id,
    ).first()


def create_trainer_assignment(
    db: Session, group_id: str, trainer_id: str, is_primary: bool = False
) -> RecurringTrainingTrainerAssignment:
    assignment = RecurringTrainingTrainerAssignment(
        training_group_id=group_id,
        trainer_id=trainer_id,
        is_primary=is_primary,
    )
    db.add(assignment)
    db.flush()
    return assignment


def delete_trainer_assignment(db: Session, assignment: RecurringTrainingTrainerAssignment) -> None:
    db.delete(assignment)
    db.flush()
