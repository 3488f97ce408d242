from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SystemSettingsResponse(BaseModel):
    cancellation_deadline_hours: int
    absence_alert_threshold: int
    absence_alert_window_days: int
    absence_alert_cooldown_days: int
    absence_alert_enabled: bool
    admin_notification_email: Optional[str] = None
    session_generation_days_ahead: int
    last_modified_by: Optional[str] = None
    last_modified_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class SystemSettingsUpdate(BaseModel):
    cancellation_deadline_hours: Optional[int] = Field(None, ge=0, le=168)
    absence_alert_threshold: Optional[int] = Field(None, ge=1, le=50)
    absence_alert_window_days: Optional[int] = Field(None, ge=1, le=365)
    absence_alert_cooldown_days: Optional[int] = Field(None, ge=0, le=365)
    absence_alert_enabled: Optional[bool] = None
    admin_notification_email: Optional[str] = None
    session_generation_days_ahead: Optional[int] = Field(None, ge=1, le=366)
