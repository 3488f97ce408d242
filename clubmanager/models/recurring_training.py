from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Column, String, Date, Boolean, DateTime, Integer, ForeignKey, UniqueConstraint, Enum as SQLEnum
)
from sqlalchemy.orm import relationship

from clubmanager.database import Base, generate_id


class DayOfWeek(str, Enum):
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"
    SUNDAY = "SUNDAY"


# Python weekday() numbering (Monday == 0)
DAY_OF_WEEK_TO_NUMBER = {day: index for index, day in enumerate(DayOfWeek)}
NUMBER_TO_DAY_OF_WEEK = {index: day for day, index in DAY_OF_WEEK_TO_NUMBER.items()}


class RecurrenceInterval(str, Enum):
    ONCE = "ONCE"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"


class RecurringTraining(Base):
    __tablename__ = "recurring_trainings"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String, nullable=False)
    day_of_week = Column(SQLEnum(DayOfWeek), nullable=False)
    start_time = Column(String(5), nullable=False)  # "HH:MM"
    end_time = Column(String(5), nullable=False)  # "HH:MM"
    recurrence = Column(SQLEnum(RecurrenceInterval), nullable=False, default=RecurrenceInterval.WEEKLY)
    valid_from = Column(Date, nullable=True)
    valid_until = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    training_groups = relationship(
        "TrainingGroup",
        back_populates="recurring_training",
        cascade="all, delete-orphan",
        order_by="TrainingGroup.sort_order",
    )
    sessions = relationship("TrainingSession", back_populates="recurring_training")


class TrainingGroup(Base):
    __tablename__ = "training_groups"

    id = Column(String(36), primary_key=True, default=generate_id)
    recurring_training_id = Column(String(36), ForeignKey("recurring_trainings.id", ondelete="CASCADE"), nullable=False)
    name = Column(String, nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)

    recurring_training = relationship("RecurringTraining", back_populates="training_groups")
    athlete_assignments = relationship(
        "RecurringTrainingAthleteAssignment", back_populates="training_group", cascade="all, delete-orphan"
    )
    trainer_assignments = relationship(
        "RecurringTrainingTrainerAssignment", back_populates="training_group", cascade="all, delete-orphan"
    )


class RecurringTrainingAthleteAssignment(Base):
    __tablename__ = "recurring_training_athlete_assignments"

    id = Column(String(36), primary_key=True, default=generate_id)
    training_group_id = Column(String(36), ForeignKey("training_groups.id", ondelete="CASCADE"), nullable=False)
    athlete_id = Column(String(36), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False)
    assigned_at = Column(DateTime, default=datetime.utcnow)
    assigned_by = Column(String(36), nullable=True)

    training_group = relationship("TrainingGroup", back_populates="athlete_assignments")
    athlete = relationship("Athlete", back_populates="group_assignments")

    __table_args__ = (
        UniqueConstraint("training_group_id", "athlete_id", name="uq_group_athlete"),
    )


class RecurringTrainingTrainerAssignment(Base):
    __tablename__ = "recurring_training_trainer_assignments"

    id = Column(String(36), primary_key=True, default=generate_id)
    training_group_id = Column(String(36), ForeignKey("training_groups.id", ondelete="CASCADE"), nullable=False)
    trainer_id = Column(String(36), ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False)
    is_primary = Column(Boolean, nullable=False, default=False)
    assigned_at = Column(DateTime, default=datetime.utcnow)

    training_group = relationship("TrainingGroup", back_populates="trainer_assignments")
    trainer = relationship("Trainer", back_populates="group_assignments")

    __table_args__ = (
        UniqueConstraint("training_group_id", "trainer_id", name="uq_group_trainer"),
    )
