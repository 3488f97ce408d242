from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from clubmanager.auth.permissions import get_current_user
from clubmanager.dependencies import get_db
from clubmanager.schemas.settings import SystemSettingsResponse, SystemSettingsUpdate
from clubmanager.services.settings import SettingsService

router = APIRouter(prefix="/settings", tags=["Settings"])


@router.get("/", response_model=SystemSettingsResponse)
def get_settings_endpoint(
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    return SettingsService(db).get_settings()


@router.patch("/", response_model=SystemSettingsResponse)
def update_settings_endpoint(
    update_data: SystemSettingsUpdate,
    current_user=Depends(get_current_user(["ADMIN"])),
    db: Session = Depends(get_db),
):
    return SettingsService(db).update_settings(update_data, modified_by=current_user["id"])
