"""
Attendance statistics and absence detection.

Everything here is a read-only computation over a snapshot fetched from the
database. Database errors are not caught and reach the caller unchanged.
"""
import calendar
import logging
import math
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from clubmanager.crud import attendance as attendance_crud
from clubmanager.crud import training_session as session_crud
from clubmanager.models import AttendanceStatus, YouthCategory
from clubmanager.models.attendance import ABSENCE_STATUSES
from clubmanager.schemas.statistics import (
    MonthlyAttendance,
    CategoryAttendanceBucket,
    TrainingAttendanceBucket,
    AttendanceStatistics,
    AbsenceAlertEntry,
    MonthlyComparisonEntry,
    AthleteDashboardStats,
)
from clubmanager.utils.youth_category import YOUTH_CATEGORY_LABELS, calculate_youth_category

logger = logging.getLogger(__name__)

DEFAULT_ABSENCE_WINDOW_DAYS = 30


def attendance_rate(present: int, total: int) -> int:
    """Percentage rounded half up; 0 when there is nothing to count."""
    if total <= 0:
        return 0
    return math.floor(present * 100 / total + 0.5)


def month_bounds(day: date) -> Tuple[date, date]:
    last_day = calendar.monthrange(day.year, day.month)[1]
    return date(day.year, day.month, 1), date(day.year, day.month, last_day)


def shift_months(day: date, months: int) -> date:
    """First day of the month ``months`` away from ``day`` (negative goes back)."""
    index = day.year * 12 + (day.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def week_bounds(day: date) -> Tuple[date, date]:
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


class StatisticsService:
    def __init__(self, db: Session):
        self.db = db

    def compute_monthly_attendance(self, athlete_id: str, month: date) -> MonthlyAttendance:
        """Attendance of one athlete within the calendar month containing ``month``."""
        month_start, month_end = month_bounds(month)
        records = attendance_crud.get_athlete_records_in_range(self.db, athlete_id, month_start, month_end)

        total = len(records)
        present = sum(1 for record in records if record.status == AttendanceStatus.PRESENT)

        return MonthlyAttendance(
            athlete_id=athlete_id,
            month=month_start.strftime("%Y-%m"),
            total=total,
            present=present,
            rate=attendance_rate(present, total),
        )

    def detect_absence_alerts(
        self,
        threshold: int,
        window_days: int = DEFAULT_ABSENCE_WINDOW_DAYS,
        today: Optional[date] = None,
        include_excused: bool = True,
    ) -> List[AbsenceAlertEntry]:
        """
        Athletes with at least ``threshold`` absences in completed sessions
        of the trailing window, highest count first.

        Both excused and unexcused absences count unless ``include_excused``
        is False. The count is a tally over the window, not a streak.
        """
        today = today or date.today()
        window_start = today - timedelta(days=window_days)
        statuses = ABSENCE_STATUSES if include_excused else (AttendanceStatus.ABSENT_UNEXCUSED,)

        sessions = session_crud.get_completed_sessions_with_absences(self.db, window_start, today)

        tallies: Dict[str, dict] = {}
        for session in sessions:
            for record in session.attendance_records:
                if record.status not in statuses:
                    continue

                entry = tallies.get(record.athlete_id)
                if entry is None:
                    tallies[record.athlete_id] = {
                        "athlete": record.athlete,
                        "count": 1,
                        "last_absence": session.date,
                    }
                else:
                    entry["count"] += 1
                    if session.date > entry["last_absence"]:
                        entry["last_absence"] = session.date

        alerts = [
            AbsenceAlertEntry(
                athlete_id=athlete_id,
                name=entry["athlete"].full_name,
                email=entry["athlete"].email,
                consecutive_absences=entry["count"],
                last_absence_date=entry["last_absence"],
            )
            for athlete_id, entry in tallies.items()
            if entry["count"] >= threshold
        ]
        alerts.sort(key=lambda alert: (-alert.consecutive_absences, alert.name))

        logger.debug(f"Absence scan {window_start}..{today}: {len(alerts)} athletes at or above {threshold}")
        return alerts

    def categorized_attendance_statistics(self, date_from: date, date_to: date) -> AttendanceStatistics:
        """
        Attendance totals for a date range plus per-youth-category and
        per-recurring-training buckets. One bulk fetch, grouped in memory.
        """
        records = attendance_crud.get_records_in_range(self.db, date_from, date_to)

        present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        excused = sum(1 for r in records if r.status == AttendanceStatus.ABSENT_EXCUSED)
        unexcused = sum(1 for r in records if r.status == AttendanceStatus.ABSENT_UNEXCUSED)
        total = len(records)

        return AttendanceStatistics(
            date_from=date_from,
            date_to=date_to,
            total_sessions=len({r.training_session_id for r in records}),
            total_records=total,
            present=present,
            excused=excused,
            unexcused=unexcused,
            attendance_rate=attendance_rate(present, total),
            by_category=self._group_by_category(records, date_to.year),
            by_training=self._group_by_training(records),
        )

    def _group_by_category(self, records, reference_year: int) -> Dict[str, CategoryAttendanceBucket]:
        counts = {category.value: [0, 0] for category in YouthCategory}
        for record in records:
            athlete = record.athlete
            category = athlete.youth_category or calculate_youth_category(athlete.birth_date, reference_year)
            if category is None:
                continue
            bucket = counts[YouthCategory(category).value]
            bucket[0] += 1
            if record.status == AttendanceStatus.PRESENT:
                bucket[1] += 1

        return {
            category: CategoryAttendanceBucket(
                label=YOUTH_CATEGORY_LABELS[YouthCategory(category)],
                total=total,
                present=present,
                rate=attendance_rate(present, total),
            )
            for category, (total, present) in counts.items()
        }

    def _group_by_training(self, records) -> List[TrainingAttendanceBucket]:
        # Insertion ordered: buckets appear in the order trainings are first seen
        by_training: Dict[str, dict] = {}
        for record in records:
            session = record.training_session
            if not session.recurring_training_id:
                continue

            stats = by_training.setdefault(session.recurring_training_id, {
                "name": session.recurring_training.name if session.recurring_training else "Unknown",
                "total": 0,
                "present": 0,
            })
            stats["total"] += 1
            if record.status == AttendanceStatus.PRESENT:
                stats["present"] += 1

        return [
            TrainingAttendanceBucket(
                recurring_training_id=training_id,
                name=stats["name"],
                total=stats["total"],
                present=stats["present"],
                rate=attendance_rate(stats["present"], stats["total"]),
            )
            for training_id, stats in by_training.items()
        ]

    def monthly_comparison(self, months: int = 6, today: Optional[date] = None) -> List[MonthlyComparisonEntry]:
        """Sessions and attendance rate for the last ``months`` months, oldest first."""
        today = today or date.today()
        stats = []

        for offset in range(months - 1, -1, -1):
            month_start, month_end = month_bounds(shift_months(today, -offset))
            sessions = session_crud.count_sessions_in_range(self.db, month_start, month_end)
            records = attendance_crud.get_records_in_range(self.db, month_start, month_end)
            present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)

            stats.append(MonthlyComparisonEntry(
                month=month_start.strftime("%Y-%m"),
                sessions=sessions,
                total_attendance=len(records),
                present=present,
                rate=attendance_rate(present, len(records)),
            ))

        return stats

    def athlete_dashboard_stats(self, athlete_id: str, today: Optional[date] = None) -> AthleteDashboardStats:
        today = today or date.today()
        week_start, week_end = week_bounds(today)

        next_session = session_crud.get_next_athlete_session(self.db, athlete_id, today)
        upcoming = session_crud.count_athlete_sessions_in_range(self.db, athlete_id, week_start, week_end)
        active_cancellations = attendance_crud.count_active_future_cancellations(self.db, athlete_id, today)
        monthly = self.compute_monthly_attendance(athlete_id, today)

        cancelled_by_athlete = False
        if next_session is not None:
            cancelled_by_athlete = any(
                c.athlete_id == athlete_id and c.is_active for c in next_session.cancellations
            )

        return AthleteDashboardStats(
            next_session_id=next_session.id if next_session else None,
            next_session_date=next_session.date if next_session else None,
            next_session_name=(
                next_session.recurring_training.name
                if next_session and next_session.recurring_training else None
            ),
            next_session_cancelled_by_athlete=cancelled_by_athlete,
            upcoming_sessions_this_week=upcoming,
            active_cancellations=active_cancellations,
            monthly_total=monthly.total,
            monthly_present=monthly.present,
            monthly_attendance_rate=monthly.rate,
        )
