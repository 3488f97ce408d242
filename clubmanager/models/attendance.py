from datetime import datetime
from enum import Enum

from sqlalchemy import Column, String, Boolean, DateTime, Text, ForeignKey, UniqueConstraint, Enum as SQLEnum
from sqlalchemy.orm import relationship

from clubmanager.database import Base, generate_id


class AttendanceStatus(str, Enum):
    PRESENT = "PRESENT"
    ABSENT_EXCUSED = "ABSENT_EXCUSED"
    ABSENT_UNEXCUSED = "ABSENT_UNEXCUSED"


ABSENCE_STATUSES = (AttendanceStatus.ABSENT_EXCUSED, AttendanceStatus.ABSENT_UNEXCUSED)


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"

    id = Column(String(36), primary_key=True, default=generate_id)
    athlete_id = Column(String(36), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False)
    training_session_id = Column(String(36), ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False)
    status = Column(SQLEnum(AttendanceStatus), nullable=False)
    notes = Column(Text, nullable=True)
    marked_by = Column(String(36), ForeignKey("trainers.id"), nullable=True)
    marked_at = Column(DateTime, default=datetime.utcnow)

    athlete = relationship("Athlete", back_populates="attendance_records")
    training_session = relationship("TrainingSession", back_populates="attendance_records")

    __table_args__ = (
        UniqueConstraint("athlete_id", "training_session_id", name="uq_attendance_athlete_session"),
    )


class Cancellation(Base):
    """Advance notice from an athlete that they will miss a session."""
    __tablename__ = "cancellations"

    id = Column(String(36), primary_key=True, default=generate_id)
    athlete_id = Column(String(36), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False)
    training_session_id = Column(String(36), ForeignKey("training_sessions.id", ondelete="CASCADE"), nullable=False)
    reason = Column(String, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    athlete = relationship("Athlete", back_populates="cancellations")
    training_session = relationship("TrainingSession", back_populates="cancellations")
