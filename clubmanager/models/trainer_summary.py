from datetime import datetime

from sqlalchemy import Column, String, Integer, Numeric, Text, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from clubmanager.database import Base, generate_id


class MonthlyTrainerSummary(Base):
    __tablename__ = "monthly_trainer_summaries"

    id = Column(String(36), primary_key=True, default=generate_id)
    trainer_id = Column(String(36), ForeignKey("trainers.id", ondelete="CASCADE"), nullable=False)
    month = Column(Integer, nullable=False)
    year = Column(Integer, nullable=False)
    calculated_hours = Column(Numeric(6, 2), nullable=False, default=0)
    adjusted_hours = Column(Numeric(6, 2), nullable=True)
    final_hours = Column(Numeric(6, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    last_modified_by = Column(String(36), nullable=True)
    last_modified_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    trainer = relationship("Trainer")

    __table_args__ = (
        UniqueConstraint("month", "year", "trainer_id", name="uq_trainer_month_year"),
    )
