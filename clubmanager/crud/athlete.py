from typing import List, Optional

from sqlalchemy.orm import Session

from clubmanager.models import Athlete


def get_athlete(db: Session, athlete_id: str) -> Optional[Athlete]:
    return db.query(Athlete).filter(Athlete.id == athlete_id).first()


def get_approved_athletes(db: Session) -> List[Athlete]:
    return (
        db.query(Athlete)
        .filter(Athlete.is_approved.is_(True))
        .order_by(Athlete.last_name, Athlete.first_name)
        .all()
    )


def get_athletes_by_ids(db: Session, athlete_ids: List[str]) -> List[Athlete]:
    return db.query(Athlete).filter(Athlete.id.in_(athlete_ids)).all()
