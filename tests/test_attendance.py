from datetime import date, datetime, timedelta

import pytest

from clubmanager.errors.assignment_errors import AthleteNotFound
from clubmanager.errors.session_errors import (
    SessionNotFound,
    SessionCancelled,
    CancellationDeadlinePassed,
    CancellationExists,
    CancellationNotFound,
)
from clubmanager.models import AttendanceRecord, AttendanceStatus, Cancellation
from clubmanager.schemas.training_session import AttendanceEntry
from clubmanager.services.attendance import AttendanceService

SESSION_DAY = date(2026, 3, 2)


@pytest.fixture
def service(db_session):
    return AttendanceService(db_session)


def test_mark_attendance_upserts_records(service, db_session, make_training, make_session, make_athlete, test_trainer):
    training_session = make_session(make_training(), SESSION_DAY)
    first, second = make_athlete("First"), make_athlete("Second")

    service.mark_attendance(training_session.id, [
        AttendanceEntry(athlete_id=first.id, status=AttendanceStatus.PRESENT),
        AttendanceEntry(athlete_id=second.id, status=AttendanceStatus.ABSENT_EXCUSED, notes="Sick"),
    ], marked_by=test_trainer.id)
    records = service.mark_attendance(training_session.id, [
        AttendanceEntry(athlete_id=second.id, status=AttendanceStatus.PRESENT),
    ], marked_by=test_trainer.id)

    assert len(records) == 1
    assert db_session.query(AttendanceRecord).count() == 2
    updated = db_session.query(AttendanceRecord).filter(AttendanceRecord.athlete_id == second.id).one()
    assert updated.status == AttendanceStatus.PRESENT
    assert updated.notes is None
    assert updated.marked_by == test_trainer.id


def test_mark_attendance_on_cancelled_session(service, make_training, make_session, test_athlete):
    training_session = make_session(make_training(), SESSION_DAY, is_cancelled=True)

    with pytest.raises(SessionCancelled):
        service.mark_attendance(training_session.id, [
            AttendanceEntry(athlete_id=test_athlete.id, status=AttendanceStatus.PRESENT),
        ])


def test_mark_attendance_on_unknown_session(service, test_athlete):
    with pytest.raises(SessionNotFound):
        service.mark_attendance("missing", [])


def test_complete_and_cancel_session(service, make_training, make_session):
    training = make_training()
    completed = service.complete_session(make_session(training, SESSION_DAY).id)
    cancelled = service.cancel_session(make_session(training, SESSION_DAY + timedelta(days=7)).id, "Hall closed")

    assert completed.is_completed is True
    assert completed.completed_at is not None
    assert cancelled.is_cancelled is True
    assert cancelled.cancellation_reason == "Hall closed"

    with pytest.raises(SessionCancelled):
        service.complete_session(cancelled.id)


def test_starts_at_uses_override_then_training_time(make_training, make_session):
    training = make_training(start_time="17:00", end_time="18:30")

    regular = make_session(training, SESSION_DAY)
    moved = make_session(training, SESSION_DAY + timedelta(days=7), start_time="16:15", end_time="17:45")

    assert regular.starts_at == datetime(2026, 3, 2, 17, 0)
    assert moved.starts_at == datetime(2026, 3, 9, 16, 15)


def test_cancellation_before_deadline(service, db_session, make_training, make_session, test_athlete):
    training_session = make_session(make_training(start_time="17:00"), SESSION_DAY)

    # Default deadline is two hours before start
    cancellation = service.create_cancellation(
        test_athlete.id, training_session.id, "School trip", now=datetime(2026, 3, 2, 15, 0)
    )

    assert cancellation.is_active is True
    assert db_session.query(Cancellation).count() == 1


def test_cancellation_after_deadline(service, make_training, make_session, test_athlete):
    training_session = make_session(make_training(start_time="17:00"), SESSION_DAY)

    with pytest.raises(CancellationDeadlinePassed):
        service.create_cancellation(
            test_athlete.id, training_session.id, "Late", now=datetime(2026, 3, 2, 15, 1)
        )


def test_duplicate_cancellation(service, make_training, make_session, test_athlete):
    training_session = make_session(make_training(), SESSION_DAY)
    now = datetime(2026, 3, 1, 12, 0)
    service.create_cancellation(test_athlete.id, training_session.id, "Trip", now=now)

    with pytest.raises(CancellationExists):
        service.create_cancellation(test_athlete.id, training_session.id, "Trip", now=now)


def test_revoked_cancellation_can_be_renewed(service, make_training, make_session, test_athlete, make_athlete):
    training_session = make_session(make_training(), SESSION_DAY)
    now = datetime(2026, 3, 1, 12, 0)
    cancellation = service.create_cancellation(test_athlete.id, training_session.id, "Trip", now=now)

    with pytest.raises(CancellationNotFound):
        service.revoke_cancellation(cancellation.id, athlete_id=make_athlete("Other").id)

    revoked = service.revoke_cancellation(cancellation.id, athlete_id=test_athlete.id)
    assert revoked.is_active is False

    renewed = service.create_cancellation(test_athlete.id, training_session.id, "Trip again", now=now)
    assert renewed.id != cancellation.id


def test_cancellation_for_cancelled_session(service, make_training, make_session, test_athlete):
    training_session = make_session(make_training(), SESSION_DAY, is_cancelled=True)

    with pytest.raises(SessionCancelled):
        service.create_cancellation(test_athlete.id, training_session.id, "Trip", now=datetime(2026, 3, 1))


def test_mark_attendance_for_unknown_athlete(service, db_session, make_training, make_session, test_athlete):
    training_session = make_session(make_training(), SESSION_DAY)

    with pytest.raises(AthleteNotFound):
        service.mark_attendance(training_session.id, [
            AttendanceEntry(athlete_id=test_athlete.id, status=AttendanceStatus.PRESENT),
            AttendanceEntry(athlete_id="no-such-athlete", status=AttendanceStatus.ABSENT_UNEXCUSED),
        ])

    assert db_session.query(AttendanceRecord).count() == 0
