from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AthleteAssignmentCreate(BaseModel):
    athlete_id: str = Field(..., min_length=1)


class TrainerAssignmentCreate(BaseModel):
    trainer_id: str = Field(..., min_length=1)
    is_primary: bool = False


class AthleteAssignmentResponse(BaseModel):
    id: str
    training_group_id: str
    athlete_id: str
    assigned_at: Optional[datetime] = None
    assigned_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AthleteAssignmentResult(BaseModel):
    assignment: AthleteAssignmentResponse
    warnings: List[str] = []


class TrainerAssignmentResponse(BaseModel):
    id: str
    training_group_id: str
    trainer_id: str
    is_primary: bool

    model_config = ConfigDict(from_attributes=True)


class TrainerAssignmentResult(BaseModel):
    assignment: TrainerAssignmentResponse
    warnings: List[str] = []


class SessionReassignmentRequest(BaseModel):
    athlete_id: str = Field(..., min_length=1)
    target_group_id: str = Field(..., min_length=1)


class SessionReassignmentResponse(BaseModel):
    id: str
    training_session_id: str
    athlete_id: str
    session_group_id: str
    assigned_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SessionReassignmentResult(BaseModel):
    reassignment: SessionReassignmentResponse
    warnings: List[str] = []
