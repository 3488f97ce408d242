import logging
from datetime import datetime

from sqlalchemy.orm import Session

from clubmanager.config import config
from clubmanager.crud import settings as settings_crud
from clubmanager.database import transactional
from clubmanager.models import SystemSettings
from clubmanager.schemas.settings import SystemSettingsUpdate

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, db: Session):
        self.db = db

    def get_settings(self) -> SystemSettings:
        """System settings, created with defaults on first access."""
        settings = settings_crud.get_settings(self.db)
        if settings is None:
            with transactional(self.db) as session:
                settings = settings_crud.create_default_settings(session, config.ADMIN_NOTIFICATION_EMAIL)
            logger.info("Created default system settings")
        return settings

    def update_settings(self, update_data: SystemSettingsUpdate, modified_by: str) -> SystemSettings:
        settings = self.get_settings()
        with transactional(self.db):
            for field, value in update_data.model_dump(exclude_unset=True).items():
                setattr(settings, field, value)
            settings.last_modified_by = modified_by
            settings.last_modified_at = datetime.utcnow()
        return settings
