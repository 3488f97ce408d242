import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from clubmanager.crud import athlete as athlete_crud
from clubmanager.crud import attendance as attendance_crud
from clubmanager.crud import training_session as session_crud
from clubmanager.database import transactional
from clubmanager.errors.assignment_errors import AthleteNotFound
from clubmanager.errors.session_errors import (
    SessionNotFound,
    SessionCancelled,
    CancellationDeadlinePassed,
    CancellationExists,
    CancellationNotFound,
)
from clubmanager.models import AttendanceRecord, AttendanceStatus, Cancellation, TrainingSession
from clubmanager.schemas.training_session import AttendanceEntry
from clubmanager.services.absence_alert import AbsenceAlertService
from clubmanager.services.notifications import EmailSender
from clubmanager.services.settings import SettingsService

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(self, db: Session, email_sender: Optional[EmailSender] = None):
        self.db = db
        self.email_sender = email_sender
        self.settings_service = SettingsService(db)

    def _get_session_or_raise(self, session_id: str) -> TrainingSession:
        training_session = session_crud.get_session(self.db, session_id)
        if not training_session:
            raise SessionNotFound("Training session not found")
        return training_session

    def mark_attendance(
        self, session_id: str, entries: List[AttendanceEntry], marked_by: Optional[str] = None
    ) -> List[AttendanceRecord]:
        """
        Upsert one attendance record per entry. Athletes marked as
        unexcused absent are checked for an absence alert afterwards.
        """
        training_session = self._get_session_or_raise(session_id)
        if training_session.is_cancelled:
            raise SessionCancelled("Attendance cannot be marked for a cancelled session")

        athlete_ids = {entry.athlete_id for entry in entries}
        known_ids = {athlete.id for athlete in athlete_crud.get_athletes_by_ids(self.db, list(athlete_ids))}
        missing = sorted(athlete_ids - known_ids)
        if missing:
            raise AthleteNotFound(f"Athletes not found: {', '.join(missing)}")

        with transactional(self.db) as session:
            records = [
                attendance_crud.upsert_attendance_record(
                    session, session_id, entry.athlete_id, entry.status, marked_by, entry.notes
                )
                for entry in entries
            ]

        unexcused = [e.athlete_id for e in entries if e.status == AttendanceStatus.ABSENT_UNEXCUSED]
        if unexcused:
            alert_service = AbsenceAlertService(self.db, self.email_sender)
            for athlete_id in unexcused:
                alert_service.check_and_send_absence_alert(athlete_id)

        logger.info(f"Marked attendance for {len(records)} athletes in session {session_id}")
        return records

    def complete_session(self, session_id: str) -> TrainingSession:
        training_session = self._get_session_or_raise(session_id)
        if training_session.is_cancelled:
            raise SessionCancelled("A cancelled session cannot be completed")

        with transactional(self.db):
            training_session.is_completed = True
            training_session.completed_at = datetime.utcnow()
        return training_session

    def cancel_session(self, session_id: str, reason: str) -> TrainingSession:
        training_session = self._get_session_or_raise(session_id)

        with transactional(self.db):
            training_session.is_cancelled = True
            training_session.cancellation_reason = reason
        logger.info(f"Session {session_id} cancelled: {reason}")
        return training_session

    def create_cancellation(
        self, athlete_id: str, session_id: str, reason: str, now: Optional[datetime] = None
    ) -> Cancellation:
        """
        Register an athlete's advance notice for a session.

        Raises:
            SessionNotFound, SessionCancelled,
            CancellationDeadlinePassed: less than the configured hours before start.
            CancellationExists: an active cancellation is already there.
        """
        now = now or datetime.utcnow()
        training_session = self._get_session_or_raise(session_id)
        if training_session.is_cancelled:
            raise SessionCancelled("Session is already cancelled")

        deadline_hours = self.settings_service.get_settings().cancellation_deadline_hours
        deadline = training_session.starts_at - timedelta(hours=deadline_hours)
        if now > deadline:
            raise CancellationDeadlinePassed(
                f"Cancellations must be made at least {deadline_hours} hours before the session"
            )

        if attendance_crud.get_active_cancellation(self.db, session_id, athlete_id):
            raise CancellationExists("Athlete has already cancelled this session")

        with transactional(self.db) as session:
            cancellation = attendance_crud.create_cancellation(session, session_id, athlete_id, reason)
        return cancellation

    def revoke_cancellation(self, cancellation_id: str, athlete_id: Optional[str] = None) -> Cancellation:
        """Deactivate a cancellation. With ``athlete_id`` only that athlete's own one is found."""
        cancellation = attendance_crud.get_cancellation(self.db, cancellation_id)
        if not cancellation or (athlete_id and cancellation.athlete_id != athlete_id):
            raise CancellationNotFound("Cancellation not found")

        with transactional(self.db):
            cancellation.is_active = False
        return cancellation
