"""
Custom task order model definitions.

A TaskOrder stores the display order a user chose for one view: either the
staging area or one specific day.
"""

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaskOrderCreate(BaseModel):
    """Schema for saving (replacing) a custom order."""

    is_target_day: bool = Field(
        ..., description="True for a specific day view, False for the staging area"
    )
    target_date: Optional[date] = Field(None, description="Day of the view")
    task_ids: list[UUID] = Field(default_factory=list, description="Ordered task IDs")

    @model_validator(mode="after")
    def validate_view(self):
        """A day view needs its date; the staging view has none."""
        if self.is_target_day and self.target_date is None:
            raise ValueError("target_date is required when is_target_day is true")
        if not self.is_target_day:
            self.target_date = None
        if len(self.task_ids) != len(set(self.task_ids)):
            raise ValueError("task_ids must not contain duplicates")
        return self


class TaskOrder(BaseModel):
    """Stored custom order for one (user, view)."""

    id: UUID
    user_id: str
    is_target_day: bool
    target_date: Optional[date] = None
    task_ids: list[UUID] = Field(default_factory=list)
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
