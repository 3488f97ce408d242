from datetime import datetime

from sqlalchemy import Column, String, Integer, Boolean, DateTime

from clubmanager.database import Base

DEFAULT_SETTINGS_ID = "default"

DEFAULT_CANCELLATION_DEADLINE_HOURS = 2
DEFAULT_ABSENCE_ALERT_THRESHOLD = 3
DEFAULT_ABSENCE_ALERT_WINDOW_DAYS = 30
DEFAULT_ABSENCE_ALERT_COOLDOWN_DAYS = 14
DEFAULT_SESSION_GENERATION_DAYS_AHEAD = 90


class SystemSettings(Base):
    __tablename__ = "system_settings"

    id = Column(String(36), primary_key=True, default=DEFAULT_SETTINGS_ID)
    cancellation_deadline_hours = Column(Integer, nullable=False, default=DEFAULT_CANCELLATION_DEADLINE_HOURS)
    absence_alert_threshold = Column(Integer, nullable=False, default=DEFAULT_ABSENCE_ALERT_THRESHOLD)
    absence_alert_window_days = Column(Integer, nullable=False, default=DEFAULT_ABSENCE_ALERT_WINDOW_DAYS)
    absence_alert_cooldown_days = Column(Integer, nullable=False, default=DEFAULT_ABSENCE_ALERT_COOLDOWN_DAYS)
    absence_alert_enabled = Column(Boolean, nullable=False, default=True)
    admin_notification_email = Column(String, nullable=True)
    session_generation_days_ahead = Column(Integer, nullable=False, default=DEFAULT_SESSION_GENERATION_DAYS_AHEAD)
    last_modified_by = Column(String(36), nullable=True)
    last_modified_at = Column(DateTime, nullable=True)
