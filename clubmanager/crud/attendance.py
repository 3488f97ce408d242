from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from clubmanager.models import AttendanceRecord, AttendanceStatus, Cancellation, TrainingSession


def get_attendance_record(db: Session, session_id: str, athlete_id: str) -> Optional[AttendanceRecord]:
    return db.query(AttendanceRecord).filter(
        AttendanceRecord.training_session_id == session_id,
        AttendanceRecord.athlete_id == athlete_id,
    ).first()


def upsert_attendance_record(
    db: Session,
    session_id: str,
    athlete_id: str,
    status: AttendanceStatus,
    marked_by: Optional[str],
    notes: Optional[str] = None,
) -> AttendanceRecord:
    record = get_attendance_record(db, session_id, athlete_id)
    if record is None:
        record = AttendanceRecord(training_session_id=session_id, athlete_id=athlete_id)
        db.add(record)

    record.status = status
    record.notes = notes
    record.marked_by = marked_by
    record.marked_at = datetime.utcnow()
    db.flush()
    return record


def get_athlete_records_in_range(
    db: Session, athlete_id: str, start_date: date, end_date: date
) -> List[AttendanceRecord]:
    return (
        db.query(AttendanceRecord)
        .join(TrainingSession, AttendanceRecord.training_session_id == TrainingSession.id)
        .filter(
            AttendanceRecord.athlete_id == athlete_id,
            TrainingSession.date >= start_date,
            TrainingSession.date <= end_date,
        )
        .all()
    )


def get_records_in_range(db: Session, start_date: date, end_date: date) -> List[AttendanceRecord]:
    """Single bulk fetch of records with athlete, session and training loaded."""
    return (
        db.query(AttendanceRecord)
        .join(TrainingSession, AttendanceRecord.training_session_id == TrainingSession.id)
        .options(
            joinedload(AttendanceRecord.athlete),
            joinedload(AttendanceRecord.training_session).joinedload(TrainingSession.recurring_training),
        )
        .filter(TrainingSession.date >= start_date, TrainingSession.date <= end_date)
        .all()
    )


# Cancellations

def get_active_cancellation(db: Session, session_id: str, athlete_id: str) -> Optional[Cancellation]:
    return db.query(Cancellation).filter(
        Cancellation.training_session_id == session_id,
        Cancellation.athlete_id == athlete_id,
        Cancellation.is_active.is_(True),
    ).first()


def get_cancellation(db: Session, cancellation_id: str) -> Optional[Cancellation]:
    return db.query(Cancellation).filter(Cancellation.id == cancellation_id).first()


def create_cancellation(db: Session, session_id: str, athlete_id: str, reason: str) -> Cancellation:
    cancellation = Cancellation(training_session_id=session_id, athlete_id=athlete_id, reason=reason)
    db.add(cancellation)
    db.flush()
    return cancellation


def count_active_future_cancellations(db: Session, athlete_id: str, from_date: date) -> int:
    return (
        db.query(Cancellation)
        .join(TrainingSession, Cancellation.training_session_id == TrainingSession.id)
        .filter(
            Cancellation.athlete_id == athlete_id,
            Cancellation.is_active.is_(True),
            TrainingSession.date >= from_date,
        )
        .count()
    )
