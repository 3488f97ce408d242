from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from clubmanager.auth.permissions import get_current_user
from clubmanager.dependencies import get_db
from clubmanager.errors.trainer_errors import TrainerNotFound, InvalidHoursAdjustment
from clubmanager.schemas.trainer_hours import TrainerHoursSummary, TrainerSessionDetail, TrainerHoursAdjustment
from clubmanager.services.trainer_hours import TrainerHoursService

router = APIRouter(prefix="/trainer-hours", tags=["Trainer Hours"])


@router.get("/", response_model=List[TrainerHoursSummary])
def get_monthly_hours_endpoint(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2000, le=2100),
    current_user=Depends(get_current_user(["ADMIN"])),
    db: Session = Depends(get_db),
):
    return TrainerHoursService(db).get_trainer_hours_for_month(month, year)


@router.get("/{trainer_id}/sessions", response_model=List[TrainerSessionDetail])
def get_trainer_sessions_endpoint(
    trainer_id: str,
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=2000, le=2100),
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    # Trainers only see their own sessions
    if current_user["role"] == "TRAINER" and current_user["id"] != trainer_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Trainers can only view their own hours")
    try:
        return TrainerHoursService(db).get_trainer_session_details(trainer_id, month, year)
    except TrainerNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{trainer_id}", response_model=TrainerHoursSummary)
def adjust_trainer_hours_endpoint(
    trainer_id: str,
    adjustment: TrainerHoursAdjustment,
    current_user=Depends(get_current_user(["ADMIN"])),
    db: Session = Depends(get_db),
):
    service = TrainerHoursService(db)
    try:
        saved = service.save_trainer_hours_summary(
            trainer_id,
            adjustment.month,
            adjustment.year,
            adjusted_hours=adjustment.adjusted_hours,
            notes=adjustment.notes,
            modified_by=current_user["id"],
        )
    except TrainerNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidHoursAdjustment as e:
        raise HTTPException(status_code=400, detail=str(e))

    return next(
        s for s in service.get_trainer_hours_for_month(saved.month, saved.year) if s.trainer_id == trainer_id
    )
