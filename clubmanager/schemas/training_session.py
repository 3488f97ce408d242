from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clubmanager.models.attendance import AttendanceStatus
from clubmanager.models.recurring_training import DayOfWeek


class TrainingSessionResponse(BaseModel):
    id: str
    date: date
    day_of_week: DayOfWeek
    recurring_training_id: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_cancelled: bool
    cancellation_reason: Optional[str] = None
    is_completed: bool
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SessionGenerationRequest(BaseModel):
    """Empty days_ahead falls back to the system setting."""
    days_ahead: Optional[int] = Field(None, ge=1, le=366)


class SessionGenerationResult(BaseModel):
    created: int
    skipped: int
    errors: List[str] = []


class SessionCancelRequest(BaseModel):
    reason: str = Field(..., min_length=1)


class AttendanceEntry(BaseModel):
    athlete_id: str = Field(..., min_length=1)
    status: AttendanceStatus
    notes: Optional[str] = None


class AttendanceMarkRequest(BaseModel):
    entries: List[AttendanceEntry]

    @field_validator("entries")
    def validate_unique_athletes(cls, v: List[AttendanceEntry]) -> List[AttendanceEntry]:
        athlete_ids = [entry.athlete_id for entry in v]
        if len(athlete_ids) != len(set(athlete_ids)):
            raise ValueError("Each athlete may only appear once per attendance request")
        return v


class AttendanceRecordResponse(BaseModel):
    id: str
    athlete_id: str
    training_session_id: str
    status: AttendanceStatus
    notes: Optional[str] = None
    marked_by: Optional[str] = None
    marked_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CancellationCreate(BaseModel):
    athlete_id: str = Field(..., min_length=1)
    reason: str = Field(..., min_length=1, max_length=500)


class CancellationResponse(BaseModel):
    id: str
    athlete_id: str
    training_session_id: str
    reason: str
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
