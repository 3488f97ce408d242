from datetime import datetime, time

from sqlalchemy import (
    Column, String, Date, Boolean, DateTime, Text, ForeignKey, UniqueConstraint, Index, Enum as SQLEnum
)
from sqlalchemy.orm import relationship

from clubmanager.database import Base, generate_id
from clubmanager.models.recurring_training import DayOfWeek
from clubmanager.utils.time_slots import parse_time_to_minutes


class TrainingSession(Base):
    __tablename__ = "training_sessions"

    id = Column(String(36), primary_key=True, default=generate_id)
    date = Column(Date, nullable=False)
    day_of_week = Column(SQLEnum(DayOfWeek), nullable=False)
    # Null for ad-hoc sessions
    recurring_training_id = Column(String(36), ForeignKey("recurring_trainings.id", ondelete="SET NULL"), nullable=True)
    # Overrides of the recurring training times
    start_time = Column(String(5), nullable=True)
    end_time = Column(String(5), nullable=True)
    is_cancelled = Column(Boolean, nullable=False, default=False)
    cancellation_reason = Column(String, nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    recurring_training = relationship("RecurringTraining", back_populates="sessions")
    session_groups = relationship("SessionGroup", back_populates="training_session", cascade="all, delete-orphan")
    athlete_reassignments = relationship(
        "SessionAthleteAssignment", back_populates="training_session", cascade="all, delete-orphan"
    )
    attendance_records = relationship(
        "AttendanceRecord", back_populates="training_session", cascade="all, delete-orphan"
    )
    cancellations = relationship("Cancellation", back_populates="training_session", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint("recurring_training_id", "date", name="uq_session_training_date"),
        Index("idx_session_date", "date"),
    )

    @property
    def effective_start_time(self):
        if self.start_time:
            return self.start_time
        return self.recurring_training.start_time if self.recurring_training else None

    @property
    def effective_end_time(self):
        if self.end_time:
            return self.end_time
        return self.recurring_training.end_time if self.recurring_training else None

    @property
    def starts_at(self) -> datetime:
        """Start as a naive datetime; midnight when no time is known."""
        start_time = self.effective_start_time
        if not start_time:
            return datetime.combine(self.date, time(0, 0))
        minutes = parse_time_to_minutes(start_time)
        return datetime.combine(self.date, time(minutes // 60, minutes % 60))


class SessionGroup(Base):
    __tablename__ = "session_groups"

    id = Column(String(36), primary_key=True, default=generate_id)
    training_session_id = Column(String(36), ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False)
    training_group_id = Column(String(36), ForeignKey("training_groups.id", ondelete="CASCADE"), nullable=False)
    exercises = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)

    training_session = relationship("TrainingSession", back_populates="session_groups")
    training_group = relationship("TrainingGroup")
    trainer_assignments = relationship(
        "SessionGroupTrainerAssignment", back_populates="session_group", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("training_session_id", "training_group_id", name="uq_session_group"),
    )


class SessionGroupTrainerAssignment(Base):
    __tablename__ = "session_group_trainer_assignments"

    id = Column(String(36), primary_key=True, default=generate_id)
    session_group_id = Column(String(36), ForeignKey("session_groups.id", ondelete="CASCADE"), nullable=False)
    trainer_id = Column(String(36), ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False)

    session_group = relationship("SessionGroup", back_populates="trainer_assignments")
    trainer = relationship("Trainer")


class SessionAthleteAssignment(Base):
    """One-off move of an athlete into another group for a single session."""
    __tablename__ = "session_athlete_assignments"

    id = Column(String(36), primary_key=True, default=generate_id)
    training_session_id = Column(String(36), ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False)
    athlete_id = Column(String(36), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False)
    session_group_id = Column(String(36), ForeignKey("session_groups.id", ondelete="CASCADE"), nullable=False)
    assigned_by = Column(String(36), nullable=True)
    assigned_at = Column(DateTime, default=datetime.utcnow)

    training_session = relationship("TrainingSession", back_populates="athlete_reassignments")
    session_group = relationship("SessionGroup")
    athlete = relationship("Athlete")

    __table_args__ = (
        UniqueConstraint("training_session_id", "athlete_id", name="uq_session_athlete"),
    )
