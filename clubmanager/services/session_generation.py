import logging
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from clubmanager.crud import recurring_training as training_crud
from clubmanager.crud import training_session as session_crud
from clubmanager.database import transactional
from clubmanager.errors.session_errors import RecurringTrainingNotFound
from clubmanager.models import DayOfWeek, RecurrenceInterval, RecurringTraining, TrainingSession
from clubmanager.models.recurring_training import DAY_OF_WEEK_TO_NUMBER, NUMBER_TO_DAY_OF_WEEK
from clubmanager.schemas.training_session import SessionGenerationResult
from clubmanager.services.settings import SettingsService
from clubmanager.utils.time_slots import parse_time_to_minutes

logger = logging.getLogger(__name__)


def _next_weekday_on_or_after(day: date, target: int) -> date:
    return day + timedelta(days=(target - day.weekday()) % 7)


def _add_month_same_weekday(day: date, target: int) -> date:
    """Same day of month one month later (clamped), moved forward to the target weekday."""
    year = day.year + day.month // 12
    month = day.month % 12 + 1
    next_month_start = date(year, month, 1)
    # Day 28 always exists; walk forward while the month allows it
    candidate = next_month_start.replace(day=min(day.day, 28))
    while candidate.day < day.day:
        following = candidate + timedelta(days=1)
        if following.month != month:
            break
        candidate = following
    return _next_weekday_on_or_after(candidate, target)


def calculate_session_dates(
    day_of_week: DayOfWeek,
    recurrence: RecurrenceInterval,
    start_date: date,
    end_date: date,
    valid_from: Optional[date] = None,
    valid_until: Optional[date] = None,
) -> List[date]:
    """
    Dates of a recurring training between ``start_date`` and ``end_date``
    (both inclusive), restricted to its validity window.
    """
    target = DAY_OF_WEEK_TO_NUMBER[DayOfWeek(day_of_week)]
    recurrence = RecurrenceInterval(recurrence)

    current = start_date
    if valid_from and valid_from > current:
        current = valid_from
    current = _next_weekday_on_or_after(current, target)

    dates: List[date] = []
    while current <= end_date:
        if valid_until and current > valid_until:
            break

        dates.append(current)

        if recurrence == RecurrenceInterval.ONCE:
            break
        elif recurrence == RecurrenceInterval.WEEKLY:
            current += timedelta(days=7)
        elif recurrence == RecurrenceInterval.BIWEEKLY:
            current += timedelta(days=14)
        elif recurrence == RecurrenceInterval.MONTHLY:
            current = _add_month_same_weekday(current, target)

    return dates


class SessionGenerationService:
    def __init__(self, db: Session):
        self.db = db
        self.settings_service = SettingsService(db)

    def generate_sessions(
        self, days_ahead: Optional[int] = None, today: Optional[date] = None
    ) -> SessionGenerationResult:
        """
        Materialise sessions for every active recurring training.

        Existing (training, date) sessions are skipped. A failing training
        is reported in ``errors`` and does not stop the others.
        """
        if days_ahead is None:
            days_ahead = self.settings_service.get_settings().session_generation_days_ahead
        today = today or date.today()
        end_date = today + timedelta(days=days_ahead)

        result = SessionGenerationResult(created=0, skipped=0, errors=[])

        for training in training_crud.get_active_recurring_trainings(self.db):
            try:
                with transactional(self.db) as session:
                    created, skipped = self._generate_for_training_logic(session, training, today, end_date)
                result.created += created
                result.skipped += skipped
            except (SQLAlchemyError, ValueError) as e:
                logger.exception(f"Session generation failed for recurring training {training.id}")
                result.errors.append(f'Training "{training.name}": {e}')

        logger.info(
            f"Session generation up to {end_date}: created={result.created}, "
            f"skipped={result.skipped}, errors={len(result.errors)}"
        )
        return result

    def generate_sessions_for_training(
        self, recurring_training_id: str, days_ahead: Optional[int] = None, today: Optional[date] = None
    ) -> SessionGenerationResult:
        training = training_crud.get_recurring_training(self.db, recurring_training_id)
        if not training:
            raise RecurringTrainingNotFound("Recurring training not found")

        if days_ahead is None:
            days_ahead = self.settings_service.get_settings().session_generation_days_ahead
        today = today or date.today()

        with transactional(self.db) as session:
            created, skipped = self._generate_for_training_logic(
                session, training, today, today + timedelta(days=days_ahead)
            )
        return SessionGenerationResult(created=created, skipped=skipped, errors=[])

    def create_ad_hoc_session(
        self,
        session_date: date,
        start_time: str,
        end_time: str,
        notes: Optional[str] = None,
    ) -> TrainingSession:
        """Single session without a recurring training."""
        if parse_time_to_minutes(end_time) <= parse_time_to_minutes(start_time):
            raise ValueError("End time must be after start time")

        with transactional(self.db) as session:
            training_session = TrainingSession(
                date=session_date,
                day_of_week=NUMBER_TO_DAY_OF_WEEK[session_date.weekday()],
                start_time=start_time,
                end_time=end_time,
                notes=notes,
            )
            session.add(training_session)
        return training_session

    def delete_future_sessions(self, recurring_training_id: str, today: Optional[date] = None) -> int:
        """Remove not yet completed sessions after today, e.g. when a training is deactivated."""
        today = today or date.today()
        with transactional(self.db) as session:
            deleted = session_crud.delete_future_sessions(session, recurring_training_id, today)
        logger.info(f"Deleted {deleted} future sessions of recurring training {recurring_training_id}")
        return deleted

    # --- Private Logic Methods (Non-Transactional) ---

    def _generate_for_training_logic(
        self, session: Session, training: RecurringTraining, today: date, end_date: date
    ) -> tuple[int, int]:
        session_dates = calculate_session_dates(
            training.day_of_week,
            training.recurrence,
            today,
            end_date,
            training.valid_from,
            training.valid_until,
        )

        created = skipped = 0
        for session_date in session_dates:
            if session_crud.get_session_by_training_and_date(session, training.id, session_date):
                skipped += 1
                continue

            training_session = session_crud.create_session(session, training, session_date)
            self._copy_trainer_assignments(session, training_session)
            created += 1

        return created, skipped

    def _copy_trainer_assignments(self, session: Session, training_session: TrainingSession) -> None:
        for session_group in session_crud.get_session_groups(session, training_session.id):
            for assignment in training_crud.get_trainer_assignments_for_group(session, session_group.training_group_id):
                session_crud.add_session_group_trainer(session, session_group.id, assignment.trainer_id)
        session.flush()
