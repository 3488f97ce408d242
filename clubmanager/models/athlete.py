from datetime import datetime
from enum import Enum

from sqlalchemy import Column, String, Date, Boolean, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship

from clubmanager.database import Base, generate_id


class YouthCategory(str, Enum):
    F = "F"
    E = "E"
    D = "D"
    C = "C"
    B = "B"
    A = "A"
    ADULT = "ADULT"


class Athlete(Base):
    __tablename__ = "athletes"

    id = Column(String(36), primary_key=True, default=generate_id)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False)
    birth_date = Column(Date, nullable=True)
    youth_category = Column(SQLEnum(YouthCategory), nullable=True)

    # Guardian / emergency contact
    guardian_name = Column(String, nullable=True)
    guardian_email = Column(String, nullable=True)
    guardian_phone = Column(String, nullable=True)
    emergency_contact_name = Column(String, nullable=True)
    emergency_contact_phone = Column(String, nullable=True)

    is_approved = Column(Boolean, nullable=False, default=False)
    approved_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    group_assignments = relationship(
        "RecurringTrainingAthleteAssignment", back_populates="athlete", cascade="all, delete-orphan"
    )
    attendance_records = relationship("AttendanceRecord", back_populates="athlete", cascade="all, delete-orphan")
    cancellations = relationship("Cancellation", back_populates="athlete", cascade="all, delete-orphan")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __repr__(self):
        return f"<Athlete(id={self.id}, first_name={self.first_name}, last_name={self.last_name})>"
