from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from clubmanager.auth.permissions import get_current_user
from clubmanager.dependencies import get_db
from clubmanager.errors.session_errors import AbsenceAlertNotFound
from clubmanager.schemas.absence_alert import AbsenceAlertResponse
from clubmanager.services.absence_alert import AbsenceAlertService

router = APIRouter(prefix="/absence-alerts", tags=["Absence Alerts"])


@router.get("/", response_model=List[AbsenceAlertResponse])
def get_recent_alerts_endpoint(
    days: int = Query(30, ge=1, le=365),
    limit: int = Query(50, ge=1, le=500),
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    return AbsenceAlertService(db).get_recent_alerts(days, limit)


@router.get("/athletes/{athlete_id}", response_model=List[AbsenceAlertResponse])
def get_athlete_alerts_endpoint(
    athlete_id: str,
    limit: int = Query(10, ge=1, le=100),
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    return AbsenceAlertService(db).get_athlete_alerts(athlete_id, limit)


@router.post("/athletes/{athlete_id}/check", response_model=Optional[AbsenceAlertResponse])
def check_athlete_endpoint(
    athlete_id: str,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    """Run the alert check now; null when no alert was due."""
    return AbsenceAlertService(db).check_and_send_absence_alert(athlete_id)


@router.post("/{alert_id}/acknowledge", response_model=AbsenceAlertResponse)
def acknowledge_alert_endpoint(
    alert_id: str,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    try:
        return AbsenceAlertService(db).acknowledge_alert(alert_id, current_user["id"])
    except AbsenceAlertNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
