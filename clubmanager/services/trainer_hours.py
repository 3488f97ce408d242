import calendar
import logging
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from clubmanager.crud import trainer as trainer_crud
from clubmanager.crud import trainer_summary as summary_crud
from clubmanager.crud import training_session as session_crud
from clubmanager.database import transactional
from clubmanager.errors.trainer_errors import InvalidHoursAdjustment, TrainerNotFound
from clubmanager.models import MonthlyTrainerSummary, TrainingSession
from clubmanager.schemas.trainer_hours import TrainerHoursSummary, TrainerSessionDetail
from clubmanager.utils.time_slots import duration_hours

logger = logging.getLogger(__name__)


def _session_hours(training_session: TrainingSession) -> float:
    start = training_session.effective_start_time
    end = training_session.effective_end_time
    if not start or not end:
        return 0.0
    return max(duration_hours(start, end), 0.0)


def _month_range(month: int, year: int):
    if not 1 <= month <= 12:
        raise InvalidHoursAdjustment("Month must be between 1 and 12")
    return date(year, month, 1), date(year, month, calendar.monthrange(year, month)[1])


class TrainerHoursService:
    """Monthly hours of trainers, computed from completed sessions they led."""

    def __init__(self, db: Session):
        self.db = db

    def _calculate(self, trainer_id: str, month: int, year: int):
        start, end = _month_range(month, year)
        sessions = session_crud.get_trainer_sessions_in_range(self.db, trainer_id, start, end)
        return sessions, round(sum(_session_hours(s) for s in sessions), 2)

    def get_trainer_hours_for_month(self, month: int, year: int) -> List[TrainerHoursSummary]:
        summaries = []
        for trainer in trainer_crud.get_active_trainers(self.db):
            sessions, calculated = self._calculate(trainer.id, month, year)
            saved = summary_crud.get_summary(self.db, trainer.id, month, year)

            adjusted = float(saved.adjusted_hours) if saved and saved.adjusted_hours is not None else None
            summaries.append(TrainerHoursSummary(
                trainer_id=trainer.id,
                trainer_name=trainer.full_name,
                month=month,
                year=year,
                calculated_hours=calculated,
                adjusted_hours=adjusted,
                final_hours=adjusted if adjusted is not None else calculated,
                notes=saved.notes if saved else None,
                session_count=len(sessions),
            ))

        summaries.sort(key=lambda s: s.trainer_name)
        return summaries

    def get_trainer_session_details(self, trainer_id: str, month: int, year: int) -> List[TrainerSessionDetail]:
        if not trainer_crud.get_trainer(self.db, trainer_id):
            raise TrainerNotFound("Trainer not found")

        sessions, _ = self._calculate(trainer_id, month, year)
        details = []
        for training_session in sessions:
            group_names = [
                group.training_group.name
                for group in training_session.session_groups
                if any(a.trainer_id == trainer_id for a in group.trainer_assignments)
            ]
            details.append(TrainerSessionDetail(
                id=training_session.id,
                date=training_session.date,
                training_name=(
                    training_session.recurring_training.name if training_session.recurring_training else "Ad-hoc"
                ),
                start_time=training_session.effective_start_time or "",
                end_time=training_session.effective_end_time or "",
                duration_hours=round(_session_hours(training_session), 2),
                group_names=group_names,
            ))
        return details

    def save_trainer_hours_summary(
        self,
        trainer_id: str,
        month: int,
        year: int,
        adjusted_hours: Optional[float] = None,
        notes: Optional[str] = None,
        modified_by: Optional[str] = None,
    ) -> MonthlyTrainerSummary:
        """Store calculated hours with an optional manual adjustment."""
        if not trainer_crud.get_active_trainer(self.db, trainer_id):
            raise TrainerNotFound("Trainer not found")
        if adjusted_hours is not None and adjusted_hours < 0:
            raise InvalidHoursAdjustment("Adjusted hours cannot be negative")

        _, calculated = self._calculate(trainer_id, month, year)

        with transactional(self.db) as session:
            summary = summary_crud.upsert_summary(
                session,
                trainer_id,
                month,
                year,
                calculated_hours=calculated,
                adjusted_hours=adjusted_hours,
                final_hours=adjusted_hours if adjusted_hours is not None else calculated,
                notes=notes,
                last_modified_by=modified_by,
                last_modified_at=datetime.utcnow(),
            )

        logger.info(f"Saved hours summary for trainer {trainer_id} {year}-{month:02d}")
        return summary
