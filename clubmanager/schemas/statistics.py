from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel


class MonthlyAttendance(BaseModel):
    athlete_id: str
    month: str  # "YYYY-MM"
    total: int
    present: int
    rate: int


class AttendanceBucket(BaseModel):
    total: int
    present: int
    rate: int


class CategoryAttendanceBucket(AttendanceBucket):
    label: str


class TrainingAttendanceBucket(AttendanceBucket):
    recurring_training_id: str
    name: str


class AttendanceStatistics(BaseModel):
    date_from: date
    date_to: date
    total_sessions: int
    total_records: int
    present: int
    excused: int
    unexcused: int
    attendance_rate: int
    by_category: Dict[str, CategoryAttendanceBucket]
    by_training: List[TrainingAttendanceBucket]


class AbsenceAlertEntry(BaseModel):
    athlete_id: str
    name: str
    email: Optional[str] = None
    consecutive_absences: int
    last_absence_date: date


class MonthlyComparisonEntry(BaseModel):
    month: str  # "YYYY-MM"
    sessions: int
    total_attendance: int
    present: int
    rate: int


class AthleteDashboardStats(BaseModel):
    next_session_id: Optional[str] = None
    next_session_date: Optional[date] = None
    next_session_name: Optional[str] = None
    next_session_cancelled_by_athlete: bool = False
    upcoming_sessions_this_week: int
    active_cancellations: int
    monthly_total: int
    monthly_present: int
    monthly_attendance_rate: int
