import logging
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from clubmanager.crud import absence_alert as alert_crud
from clubmanager.crud import athlete as athlete_crud
from clubmanager.crud import training_session as session_crud
from clubmanager.database import transactional
from clubmanager.errors.session_errors import AbsenceAlertNotFound
from clubmanager.models import AbsenceAlert, Athlete, AttendanceStatus, TrainingSession
from clubmanager.services.notifications import EmailDeliveryError, EmailSender, absence_alert_message
from clubmanager.services.settings import SettingsService

logger = logging.getLogger(__name__)


def _is_unexcused_absence(session: TrainingSession, athlete_id: str, now: datetime) -> bool:
    """
    Marked unexcused, or already started with no record at all and no
    active cancellation.
    """
    record = next((r for r in session.attendance_records if r.athlete_id == athlete_id), None)
    if record is not None:
        return record.status == AttendanceStatus.ABSENT_UNEXCUSED

    if session.starts_at > now:
        return False
    return not any(c.athlete_id == athlete_id and c.is_active for c in session.cancellations)


class AbsenceAlertService:
    def __init__(self, db: Session, email_sender: Optional[EmailSender] = None):
        self.db = db
        self.email_sender = email_sender or EmailSender()
        self.settings_service = SettingsService(db)

    def count_unexcused_absences(self, athlete_id: str, window_days: int, now: Optional[datetime] = None) -> int:
        """Unexcused absences in not cancelled sessions of the trailing window, today included."""
        now = now or datetime.utcnow()
        today = now.date()
        sessions = session_crud.get_athlete_sessions_in_range(
            self.db, athlete_id, today - timedelta(days=window_days), today
        )
        return sum(
            1 for session in sessions
            if not session.is_cancelled and _is_unexcused_absence(session, athlete_id, now)
        )

    def check_and_send_absence_alert(self, athlete_id: str, now: Optional[datetime] = None) -> Optional[AbsenceAlert]:
        """
        Create and send an alert when the athlete reached the absence
        threshold and was not alerted within the cooldown period.

        Returns the new alert, or None when no alert was due.
        """
        now = now or datetime.utcnow()
        settings = self.settings_service.get_settings()
        if not settings.absence_alert_enabled:
            return None

        athlete = athlete_crud.get_athlete(self.db, athlete_id)
        if not athlete:
            logger.warning(f"Absence check skipped, athlete {athlete_id} not found")
            return None

        count = self.count_unexcused_absences(athlete_id, settings.absence_alert_window_days, now)
        if count < settings.absence_alert_threshold:
            return None

        cooldown_start = now - timedelta(days=settings.absence_alert_cooldown_days)
        if alert_crud.get_latest_alert_since(self.db, athlete_id, cooldown_start):
            logger.debug(f"Absence alert for athlete {athlete_id} suppressed by cooldown")
            return None

        today = now.date()
        with transactional(self.db) as session:
            alert = alert_crud.create_alert(
                session,
                athlete_id,
                count,
                today - timedelta(days=settings.absence_alert_window_days),
                today,
                sent_at=now,
            )

        self._send_alert_emails(alert, athlete, settings.absence_alert_window_days, settings.admin_notification_email)
        logger.info(f"Absence alert {alert.id} created for athlete {athlete_id} ({count} absences)")
        return alert

    def check_all_athletes(self, now: Optional[datetime] = None) -> List[AbsenceAlert]:
        """Sweep over all approved athletes, used by the scheduled job."""
        alerts = []
        for athlete in athlete_crud.get_approved_athletes(self.db):
            alert = self.check_and_send_absence_alert(athlete.id, now)
            if alert:
                alerts.append(alert)
        return alerts

    def get_athlete_alerts(self, athlete_id: str, limit: int = 10) -> List[AbsenceAlert]:
        return alert_crud.get_athlete_alerts(self.db, athlete_id, limit)

    def get_recent_alerts(self, days: int = 30, limit: int = 50, now: Optional[datetime] = None) -> List[AbsenceAlert]:
        since = (now or datetime.utcnow()) - timedelta(days=days)
        return alert_crud.get_alerts_since(self.db, since, limit)

    def acknowledge_alert(self, alert_id: str, trainer_id: str) -> AbsenceAlert:
        alert = alert_crud.get_alert(self.db, alert_id)
        if not alert:
            raise AbsenceAlertNotFound("Absence alert not found")

        with transactional(self.db):
            alert.acknowledged_at = datetime.utcnow()
            alert.acknowledged_by = trainer_id
        return alert

    def _send_alert_emails(
        self, alert: AbsenceAlert, athlete: Athlete, window_days: int, admin_email: Optional[str]
    ) -> None:
        subject, body = absence_alert_message(athlete.full_name, alert.absence_count, window_days)

        sent_to_athlete = False
        try:
            self.email_sender.send(athlete.guardian_email or athlete.email, subject, body)
            sent_to_athlete = True
        except EmailDeliveryError as e:
            logger.error(f"Failed to send absence alert {alert.id} to athlete {athlete.id}: {e}")

        sent_to_admin = False
        if admin_email:
            try:
                self.email_sender.send(admin_email, subject, body)
                sent_to_admin = True
            except EmailDeliveryError as e:
                logger.error(f"Failed to send absence alert {alert.id} to admin: {e}")

        with transactional(self.db):
            alert.email_sent_to_athlete = sent_to_athlete
            alert.email_sent_to_admin = sent_to_admin
