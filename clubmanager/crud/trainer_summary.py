from typing import Optional

from sqlalchemy.orm import Session

from clubmanager.models import MonthlyTrainerSummary


def get_summary(db: Session, trainer_id: str, month: int, year: int) -> Optional[MonthlyTrainerSummary]:
    return db.query(MonthlyTrainerSummary).filter(
        MonthlyTrainerSummary.trainer_id == trainer_id,
        MonthlyTrainerSummary.month == month,
        MonthlyTrainerSummary.year == year,
    ).first()


def upsert_summary(db: Session, trainer_id: str, month: int, year: int, **values) -> MonthlyTrainerSummary:
    summary = get_summary(db, trainer_id, month, year)
    if summary is None:
        summary = MonthlyTrainerSummary(trainer_id=trainer_id, month=month, year=year)
        db.add(summary)

    for field, value in values.items():
        setattr(summary, field, value)
    db.flush()
    return summary
