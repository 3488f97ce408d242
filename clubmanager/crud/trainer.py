from typing import List, Optional

from sqlalchemy.orm import Session

from clubmanager.models import Trainer


def get_trainer(db: Session, trainer_id: str) -> Optional[Trainer]:
    return db.query(Trainer).filter(Trainer.id == trainer_id).first()


def get_active_trainer(db: Session, trainer_id: str) -> Optional[Trainer]:
    return db.query(Trainer).filter(Trainer.id == trainer_id, Trainer.is_active.is_(True)).first()


def get_active_trainers(db: Session) -> List[Trainer]:
    return db.query(Trainer).filter(Trainer.is_active.is_(True)).all()
