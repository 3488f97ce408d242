from datetime import date
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload, selectinload

from clubmanager.models import (
    TrainingSession,
    SessionGroup,
    SessionGroupTrainerAssignment,
    SessionAthleteAssignment,
    RecurringTraining,
    RecurringTrainingAthleteAssignment,
    TrainingGroup,
    AttendanceRecord,
)


def get_session(db: Session, session_id: str) -> Optional[TrainingSession]:
    return (
        db.query(TrainingSession)
        .options(joinedload(TrainingSession.recurring_training))
        .filter(TrainingSession.id == session_id)
        .first()
    )


def get_session_by_training_and_date(
    db: Session, recurring_training_id: str, session_date: date
) -> Optional[TrainingSession]:
    return db.query(TrainingSession).filter(
        TrainingSession.recurring_training_id == recurring_training_id,
        TrainingSession.date == session_date,
    ).first()


def create_session(db: Session, training: RecurringTraining, session_date: date) -> TrainingSession:
    """
    Creates a session for a recurring training together with one session
    group per training group. Flushes, does not commit.
    """
    session = TrainingSession(
        date=session_date,
        day_of_week=training.day_of_week,
        recurring_training_id=training.id,
    )
    db.add(session)
    db.flush()

    for group in training.training_groups:
        db.add(SessionGroup(training_session_id=session.id, training_group_id=group.id))
    db.flush()
    return session


def get_session_groups(db: Session, session_id: str) -> List[SessionGroup]:
    return db.query(SessionGroup).filter(SessionGroup.training_session_id == session_id).all()


def get_session_group(db: Session, session_id: str, training_group_id: str) -> Optional[SessionGroup]:
    return db.query(SessionGroup).filter(
        SessionGroup.training_session_id == session_id,
        SessionGroup.training_group_id == training_group_id,
    ).first()


def add_session_group_trainer(db: Session, session_group_id: str, trainer_id: str) -> SessionGroupTrainerAssignment:
    assignment = SessionGroupTrainerAssignment(session_group_id=session_group_id, trainer_id=trainer_id)
    db.add(assignment)
    return assignment


def get_session_reassignment(db: Session, session_id: str, athlete_id: str) -> Optional[SessionAthleteAssignment]:
    return db.query(SessionAthleteAssignment).filter(
        SessionAthleteAssignment.training_session_id == session_id,
        SessionAthleteAssignment.athlete_id == athlete_id,
    ).first()


def upsert_session_reassignment(
    db: Session,
    session_id: str,
    athlete_id: str,
    session_group_id: str,
    assigned_by: Optional[str] = None,
) -> SessionAthleteAssignment:
    reassignment = get_session_reassignment(db, session_id, athlete_id)
    if reassignment:
        reassignment.session_group_id = session_group_id
        reassignment.assigned_by = assigned_by
    else:
        reassignment = SessionAthleteAssignment(
            training_session_id=session_id,
            athlete_id=athlete_id,
            session_group_id=session_group_id,
            assigned_by=assigned_by,
        )
        db.add(reassignment)
    db.flush()
    return reassignment


def delete_future_sessions(db: Session, recurring_training_id: str, after: date) -> int:
    sessions = db.query(TrainingSession).filter(
        TrainingSession.recurring_training_id == recurring_training_id,
        TrainingSession.date > after,
        TrainingSession.is_completed.is_(False),
    ).all()
    # ORM delete so session groups and assignments cascade
    for session in sessions:
        db.delete(session)
    db.flush()
    return len(sessions)


def get_completed_sessions_with_absences(
    db: Session, start_date: date, end_date: date
) -> List[TrainingSession]:
    """Completed sessions in [start_date, end_date], newest first, records and athletes eager loaded."""
    return (
        db.query(TrainingSession)
        .options(selectinload(TrainingSession.attendance_records).joinedload(AttendanceRecord.athlete))
        .filter(
            TrainingSession.date >= start_date,
            TrainingSession.date <= end_date,
            TrainingSession.is_completed.is_(True),
        )
        .order_by(TrainingSession.date.desc())
        .all()
    )


def _athlete_session_filter(athlete_id: str):
    """Sessions where the athlete is in one of the groups or was moved in for that session."""
    in_group = TrainingSession.session_groups.any(
        SessionGroup.training_group.has(
            TrainingGroup.athlete_assignments.any(RecurringTrainingAthleteAssignment.athlete_id == athlete_id)
        )
    )
    reassigned = TrainingSession.athlete_reassignments.any(SessionAthleteAssignment.athlete_id == athlete_id)
    return or_(in_group, reassigned)


def get_athlete_sessions_in_range(
    db: Session, athlete_id: str, start_date: date, end_date: date
) -> List[TrainingSession]:
    return (
        db.query(TrainingSession)
        .options(
            joinedload(TrainingSession.recurring_training),
            selectinload(TrainingSession.attendance_records),
            selectinload(TrainingSession.cancellations),
        )
        .filter(
            TrainingSession.date >= start_date,
            TrainingSession.date <= end_date,
            _athlete_session_filter(athlete_id),
        )
        .order_by(TrainingSession.date)
        .all()
    )


def get_next_athlete_session(db: Session, athlete_id: str, from_date: date) -> Optional[TrainingSession]:
    return (
        db.query(TrainingSession)
        .options(joinedload(TrainingSession.recurring_training), selectinload(TrainingSession.cancellations))
        .filter(
            TrainingSession.date >= from_date,
            TrainingSession.is_cancelled.is_(False),
            _athlete_session_filter(athlete_id),
        )
        .order_by(TrainingSession.date)
        .first()
    )


def count_athlete_sessions_in_range(db: Session, athlete_id: str, start_date: date, end_date: date) -> int:
    return db.query(TrainingSession).filter(
        TrainingSession.date >= start_date,
        TrainingSession.date <= end_date,
        TrainingSession.is_cancelled.is_(False),
        _athlete_session_filter(athlete_id),
    ).count()


def count_sessions_in_range(db: Session, start_date: date, end_date: date) -> int:
    return db.query(TrainingSession).filter(
        TrainingSession.date >= start_date,
        TrainingSession.date <= end_date,
    ).count()


def get_trainer_sessions_in_range(
    db: Session, trainer_id: str, start_date: date, end_date: date
) -> List[TrainingSession]:
    """Completed, not cancelled sessions where the trainer leads at least one group."""
    return (
        db.query(TrainingSession)
        .options(
            joinedload(TrainingSession.recurring_training),
            selectinload(TrainingSession.session_groups).selectinload(SessionGroup.trainer_assignments),
            selectinload(TrainingSession.session_groups).joinedload(SessionGroup.training_group),
        )
        .filter(
            TrainingSession.date >= start_date,
            TrainingSession.date <= end_date,
            TrainingSession.is_cancelled.is_(False),
            TrainingSession.is_completed.is_(True),
            TrainingSession.session_groups.any(
                SessionGroup.trainer_assignments.any(SessionGroupTrainerAssignment.trainer_id == trainer_id)
            ),
        )
        .order_by(TrainingSession.date)
        .all()
    )
