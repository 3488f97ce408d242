from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field


class TrainerHoursSummary(BaseModel):
    trainer_id: str
    trainer_name: str
    month: int
    year: int
    calculated_hours: float
    adjusted_hours: Optional[float] = None
    final_hours: float
    notes: Optional[str] = None
    session_count: int


class TrainerSessionDetail(BaseModel):
    id: str
    date: date
    training_name: str
    start_time: str
    end_time: str
    duration_hours: float
    group_names: List[str]


class TrainerHoursAdjustment(BaseModel):
    month: int = Field(..., ge=1, le=12)
    year: int = Field(..., ge=2000, le=2100)
    adjusted_hours: Optional[float] = Field(None, ge=0)
    notes: Optional[str] = None
