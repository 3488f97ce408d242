import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from clubmanager.auth.permissions import get_current_user, ensure_self_or_staff
from clubmanager.dependencies import get_db
from clubmanager.errors.assignment_errors import AssignmentConflict, AthleteNotFound
from clubmanager.errors.session_errors import (
    SessionNotFound,
    RecurringTrainingNotFound,
    SessionCancelled,
    CancellationDeadlinePassed,
    CancellationExists,
    CancellationNotFound,
)
from clubmanager.schemas.assignment import SessionReassignmentRequest, SessionReassignmentResult
from clubmanager.schemas.training_session import (
    TrainingSessionResponse,
    SessionGenerationRequest,
    SessionGenerationResult,
    SessionCancelRequest,
    AttendanceMarkRequest,
    AttendanceRecordResponse,
    CancellationCreate,
    CancellationResponse,
)
from clubmanager.services.assignment import AssignmentService
from clubmanager.services.attendance import AttendanceService
from clubmanager.services.session_generation import SessionGenerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["Training Sessions"])


@router.post("/generate", response_model=SessionGenerationResult)
def generate_sessions_endpoint(
    request: SessionGenerationRequest,
    current_user=Depends(get_current_user(["ADMIN"])),
    db: Session = Depends(get_db),
):
    """Create upcoming sessions for all active recurring trainings."""
    return SessionGenerationService(db).generate_sessions(request.days_ahead)


@router.post("/generate/{recurring_training_id}", response_model=SessionGenerationResult)
def generate_training_sessions_endpoint(
    recurring_training_id: str,
    request: SessionGenerationRequest,
    current_user=Depends(get_current_user(["ADMIN"])),
    db: Session = Depends(get_db),
):
    try:
        return SessionGenerationService(db).generate_sessions_for_training(recurring_training_id, request.days_ahead)
    except RecurringTrainingNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/future/{recurring_training_id}")
def delete_future_sessions_endpoint(
    recurring_training_id: str,
    current_user=Depends(get_current_user(["ADMIN"])),
    db: Session = Depends(get_db),
):
    deleted = SessionGenerationService(db).delete_future_sessions(recurring_training_id)
    return {"deleted": deleted}


@router.post("/{session_id}/reassign", response_model=SessionReassignmentResult)
def reassign_athlete_endpoint(
    session_id: str,
    request: SessionReassignmentRequest,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    """Move an athlete into another group for this session only."""
    try:
        reassignment, warnings = AssignmentService(db).reassign_athlete_for_session(
            session_id, request.athlete_id, request.target_group_id, assigned_by=current_user["id"]
        )
    except (SessionNotFound, AthleteNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AssignmentConflict as e:
        raise HTTPException(status_code=400, detail={"errors": e.errors, "warnings": e.warnings})

    return {"reassignment": reassignment, "warnings": warnings}


@router.post("/{session_id}/attendance", response_model=List[AttendanceRecordResponse])
def mark_attendance_endpoint(
    session_id: str,
    request: AttendanceMarkRequest,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    try:
        return AttendanceService(db).mark_attendance(session_id, request.entries, marked_by=current_user["id"])
    except (SessionNotFound, AthleteNotFound) as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SessionCancelled as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{session_id}/complete", response_model=TrainingSessionResponse)
def complete_session_endpoint(
    session_id: str,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    try:
        return AttendanceService(db).complete_session(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except SessionCancelled as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/{session_id}/cancel", response_model=TrainingSessionResponse)
def cancel_session_endpoint(
    session_id: str,
    request: SessionCancelRequest,
    current_user=Depends(get_current_user(["ADMIN"])),
    db: Session = Depends(get_db),
):
    try:
        return AttendanceService(db).cancel_session(session_id, request.reason)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/{session_id}/cancellations", response_model=CancellationResponse, status_code=201)
def create_cancellation_endpoint(
    session_id: str,
    request: CancellationCreate,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER", "ATHLETE"])),
    db: Session = Depends(get_db),
):
    """Athlete's advance notice that they will not attend."""
    ensure_self_or_staff(current_user, request.athlete_id)
    try:
        return AttendanceService(db).create_cancellation(request.athlete_id, session_id, request.reason)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except (SessionCancelled, CancellationDeadlinePassed) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CancellationExists as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/cancellations/{cancellation_id}", response_model=CancellationResponse)
def revoke_cancellation_endpoint(
    cancellation_id: str,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER", "ATHLETE"])),
    db: Session = Depends(get_db),
):
    own_only = current_user["id"] if current_user["role"] == "ATHLETE" else None
    try:
        return AttendanceService(db).revoke_cancellation(cancellation_id, athlete_id=own_only)
    except CancellationNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
