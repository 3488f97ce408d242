from typing import Optional

from sqlalchemy.orm import Session

from clubmanager.models import SystemSettings
from clubmanager.models.settings import DEFAULT_SETTINGS_ID


def get_settings(db: Session) -> Optional[SystemSettings]:
    return db.query(SystemSettings).filter(SystemSettings.id == DEFAULT_SETTINGS_ID).first()


def create_default_settings(db: Session, admin_email: Optional[str] = None) -> SystemSettings:
    settings = SystemSettings(id=DEFAULT_SETTINGS_ID, admin_notification_email=admin_email)
    db.add(settings)
    db.flush()
    return settings
