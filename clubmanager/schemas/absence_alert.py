from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class AbsenceAlertResponse(BaseModel):
    id: str
    athlete_id: str
    absence_count: int
    absence_period_start: date
    absence_period_end: date
    email_sent_to_athlete: bool
    email_sent_to_admin: bool
    sent_at: datetime
    acknowledged_at: Optional[datetime] = None
    acknowledged_by: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)
