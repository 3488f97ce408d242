import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubmanager.core.security import verify_api_key
from clubmanager.dependencies import get_db
from clubmanager.services.absence_alert import AbsenceAlertService
from clubmanager.services.session_generation import SessionGenerationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cron", tags=["cron"])


@router.post("/generate-sessions", dependencies=[Depends(verify_api_key)])
def generate_sessions_endpoint(db: Session = Depends(get_db)):
    """
    Create upcoming sessions for all active recurring trainings.
    Protected by API key (X-API-Key header), called by an external scheduler.
    """
    try:
        result = SessionGenerationService(db).generate_sessions()
    except SQLAlchemyError as e:
        logger.error(f"Error in session generation: {e}")
        raise HTTPException(status_code=500, detail="Session generation failed")

    return {
        "message": "Session generation completed",
        "created": result.created,
        "skipped": result.skipped,
        "errors": result.errors,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.post("/absence-alerts", dependencies=[Depends(verify_api_key)])
def absence_alerts_endpoint(db: Session = Depends(get_db)):
    """Check every approved athlete for due absence alerts."""
    try:
        alerts = AbsenceAlertService(db).check_all_athletes()
    except SQLAlchemyError as e:
        logger.error(f"Error in absence alert sweep: {e}")
        raise HTTPException(status_code=500, detail="Absence alert check failed")

    return {
        "message": "Absence alert check completed",
        "alerts_created": len(alerts),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
