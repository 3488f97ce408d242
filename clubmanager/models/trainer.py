from datetime import datetime
from enum import Enum

from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship

from clubmanager.database import Base, generate_id


class TrainerRole(str, Enum):
    TRAINER = "TRAINER"
    ADMIN = "ADMIN"


class Trainer(Base):
    __tablename__ = "trainers"

    id = Column(String(36), primary_key=True, default=generate_id)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    role = Column(SQLEnum(TrainerRole), nullable=False, default=TrainerRole.TRAINER)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    group_assignments = relationship(
        "RecurringTrainingTrainerAssignment", back_populates="trainer", cascade="all, delete-orphan"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
