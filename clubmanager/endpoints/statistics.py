from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from clubmanager.auth.permissions import get_current_user, ensure_self_or_staff
from clubmanager.dependencies import get_db
from clubmanager.schemas.statistics import (
    MonthlyAttendance,
    AttendanceStatistics,
    AbsenceAlertEntry,
    MonthlyComparisonEntry,
    AthleteDashboardStats,
)
from clubmanager.services.settings import SettingsService
from clubmanager.services.statistics import StatisticsService

router = APIRouter(prefix="/statistics", tags=["Statistics"])


@router.get("/athletes/{athlete_id}/monthly", response_model=MonthlyAttendance)
def get_monthly_attendance_endpoint(
    athlete_id: str,
    month: Optional[date] = Query(None, description="Any day of the month, defaults to today"),
    current_user=Depends(get_current_user(["ADMIN", "TRAINER", "ATHLETE"])),
    db: Session = Depends(get_db),
):
    ensure_self_or_staff(current_user, athlete_id)
    return StatisticsService(db).compute_monthly_attendance(athlete_id, month or date.today())


@router.get("/athletes/{athlete_id}/dashboard", response_model=AthleteDashboardStats)
def get_athlete_dashboard_endpoint(
    athlete_id: str,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER", "ATHLETE"])),
    db: Session = Depends(get_db),
):
    ensure_self_or_staff(current_user, athlete_id)
    return StatisticsService(db).athlete_dashboard_stats(athlete_id)


@router.get("/attendance", response_model=AttendanceStatistics)
def get_attendance_statistics_endpoint(
    date_from: date,
    date_to: date,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    """Totals with per-youth-category and per-training breakdown."""
    if date_from > date_to:
        raise HTTPException(status_code=400, detail="date_from must not be after date_to")
    return StatisticsService(db).categorized_attendance_statistics(date_from, date_to)


@router.get("/comparison", response_model=List[MonthlyComparisonEntry])
def get_monthly_comparison_endpoint(
    months: int = Query(6, ge=1, le=24),
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    return StatisticsService(db).monthly_comparison(months)


@router.get("/absences", response_model=List[AbsenceAlertEntry])
def get_absence_alerts_endpoint(
    threshold: Optional[int] = Query(None, ge=1),
    window_days: Optional[int] = Query(None, ge=1, le=365),
    include_excused: bool = True,
    current_user=Depends(get_current_user(["ADMIN", "TRAINER"])),
    db: Session = Depends(get_db),
):
    """Athletes with many absences; threshold and window default to the system settings."""
    settings = SettingsService(db).get_settings()
    return StatisticsService(db).detect_absence_alerts(
        threshold or settings.absence_alert_threshold,
        window_days or settings.absence_alert_window_days,
        include_excused=include_excused,
    )
