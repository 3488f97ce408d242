from datetime import datetime

from sqlalchemy import Column, String, Integer, Date, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from clubmanager.database import Base, generate_id


class AbsenceAlert(Base):
    __tablename__ = "absence_alerts"

    id = Column(String(36), primary_key=True, default=generate_id)
    athlete_id = Column(String(36), ForeignKey("athletes.id", ondelete="CASCADE"), nullable=False)
    absence_count = Column(Integer, nullable=False)
    absence_period_start = Column(Date, nullable=False)
    absence_period_end = Column(Date, nullable=False)
    email_sent_to_athlete = Column(Boolean, nullable=False, default=False)
    email_sent_to_admin = Column(Boolean, nullable=False, default=False)
    sent_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    acknowledged_at = Column(DateTime, nullable=True)
    acknowledged_by = Column(String(36), ForeignKey("trainers.id"), nullable=True)

    athlete = relationship("Athlete")
