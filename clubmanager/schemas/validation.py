from typing import List

from pydantic import BaseModel, Field, ConfigDict


class ValidationResult(BaseModel):
    """Outcome of an assignment check: hard errors block, warnings inform."""
    is_valid: bool = True
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    def add_error(self, message: str) -> None:
        self.is_valid = False
        self.errors.append(message)

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)


class GroupConflict(BaseModel):
    group1: str
    group2: str
    training: str
    day_of_week: str
    time: str


class AssignmentSummaryItem(BaseModel):
    recurring_training_id: str
    recurring_training_name: str
    day_of_week: str
    time: str
    group_id: str
    group_name: str

    model_config = ConfigDict(from_attributes=True)
