import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from clubmanager.auth.permissions import get_current_user, ensure_self_or_staff
from clubmanager.dependencies import get_db
from clubmanager.errors.assignment_errors import (
    AssignmentConflict,
    AssignmentNotFound,
    AthleteNotFound,
    TrainingGroupNotFound,
)
from clubmanager.errors.trainer_errors import TrainerNotFound
from clubmanager.schemas.assignment import (
    AthleteAssignmentCreate,
    AthleteAssignmentResult,
    TrainerAssignmentCreate,
    TrainerAssignmentResult,
)
from clubmanager.schemas.validation import ValidationResult, GroupConflict, AssignmentSummaryItem
from clubmanager.services.assignment import AssignmentService
from clubmanager.validators.training_assignments import TrainingAssignmentValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/assignments", tags=["Assignments"])


@router.get("/validate", response_model=ValidationResult)
def validate_assignment_endpoint(
    athlete_id: str,
    group_id: str,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    """Dry run of an athlete assignment: errors block it, warnings only inform."""
    return TrainingAssignmentValidator(db).validate_assignment(athlete_id, group_id)


@router.get("/athletes/{athlete_id}/conflicts", response_model=List[GroupConflict])
def get_conflicts_endpoint(
    athlete_id: str,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    return TrainingAssignmentValidator(db).get_all_conflicts(athlete_id)


@router.get("/athletes/{athlete_id}/summary", response_model=List[AssignmentSummaryItem])
def get_assignment_summary_endpoint(
    athlete_id: str,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER", "ATHLETE"])),
    db: Session = Depends(get_db),
):
    ensure_self_or_staff(current_user, athlete_id)
    return TrainingAssignmentValidator(db).get_assignment_summary(athlete_id)


@router.post("/groups/{group_id}/athletes", response_model=AthleteAssignmentResult, status_code=201)
def assign_athlete_endpoint(
    group_id: str,
    assignment_data: AthleteAssignmentCreate,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    try:
        assignment, warnings = AssignmentService(db).assign_athlete(
            group_id, assignment_data.athlete_id, assigned_by=current_user["id"]
        )
    except AthleteNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AssignmentConflict as e:
        raise HTTPException(status_code=409, detail={"errors": e.errors, "warnings": e.warnings})

    return {"assignment": assignment, "warnings": warnings}


@router.delete("/groups/{group_id}/athletes/{athlete_id}")
def remove_athlete_endpoint(
    group_id: str,
    athlete_id: str,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    try:
        AssignmentService(db).remove_athlete(group_id, athlete_id)
    except AssignmentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Athlete removed from group"}


@router.post("/groups/{group_id}/trainers", response_model=TrainerAssignmentResult, status_code=201)
def assign_trainer_endpoint(
    group_id: str,
    assignment_data: TrainerAssignmentCreate,
    current_user=Depends(get_current_user(["ADMIN"])),
    db: Session = Depends(get_db),
):
    try:
        assignment, warnings = AssignmentService(db).assign_trainer(
            group_id, assignment_data.trainer_id, assignment_data.is_primary
        )
    except (TrainingGroupNotFound, TrainerNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AssignmentConflict as e:
        raise HTTPException(status_code=409, detail={"errors": e.errors, "warnings": e.warnings})

    return {"assignment": assignment, "warnings": warnings}


@router.delete("/groups/{group_id}/trainers/{trainer_id}")
def remove_trainer_endpoint(
    group_id: str,
    trainer_id: str,
    current_user=Depends(get_current_user(["ADMIN"])),
    db: Session = Depends(get_db),
):
    try:
        warnings = AssignmentService(db).remove_trainer(group_id, trainer_id)
    except AssignmentNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Trainer removed from group", "warnings": warnings}
