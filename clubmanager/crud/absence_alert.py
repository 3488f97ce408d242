from datetime import date, datetime
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from clubmanager.models import AbsenceAlert


def get_alert(db: Session, alert_id: str) -> Optional[AbsenceAlert]:
    return db.query(AbsenceAlert).filter(AbsenceAlert.id == alert_id).first()


def get_latest_alert_since(db: Session, athlete_id: str, since: datetime) -> Optional[AbsenceAlert]:
    return (
        db.query(AbsenceAlert)
        .filter(AbsenceAlert.athlete_id == athlete_id, AbsenceAlert.sent_at >= since)
        .order_by(AbsenceAlert.sent_at.desc())
        .first()
    )


def create_alert(
    db: Session,
    athlete_id: str,
    absence_count: int,
    period_start: date,
    period_end: date,
    sent_at: Optional[datetime] = None,
) -> AbsenceAlert:
    alert = AbsenceAlert(
        athlete_id=athlete_id,
        absence_count=absence_count,
        absence_period_start=period_start,
        absence_period_end=period_end,
        sent_at=sent_at or datetime.utcnow(),
    )
    db.add(alert)
    db.flush()
    return alert


def get_athlete_alerts(db: Session, athlete_id: str, limit: int = 10) -> List[AbsenceAlert]:
    return (
        db.query(AbsenceAlert)
        .filter(AbsenceAlert.athlete_id == athlete_id)
        .order_by(AbsenceAlert.sent_at.desc())
        .limit(limit)
        .all()
    )


def get_alerts_since(db: Session, since: datetime, limit: int = 50) -> List[AbsenceAlert]:
    return (
        db.query(AbsenceAlert)
        .options(joinedload(AbsenceAlert.athlete))
        .filter(AbsenceAlert.sent_at >= since)
        .order_by(AbsenceAlert.sent_at.desc())
        .limit(limit)
        .all()
    )
