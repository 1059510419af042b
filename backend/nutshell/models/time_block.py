"""
Time block model definitions.

A time block reserves a 15-minute aligned slice of one day for work on a task.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nutshell.core.config import get_settings
from nutshell.utils.datetime_utils import to_local_naive


class TimeRange(BaseModel):
    """Candidate start/end pair for a time block."""

    start_time: datetime = Field(..., description="Start (local time)")
    end_time: datetime = Field(..., description="End (local time)")

    @field_validator("start_time", "end_time")
    @classmethod
    def to_local_time(cls, value: datetime) -> datetime:
        """Aware datetimes are converted into the configured locale."""
        return to_local_naive(value, get_settings().TIMEZONE)


class TimeBlockRequest(TimeRange):
    """Schema for creating or moving a time block."""

    pass


class TimeBlock(BaseModel):
    """Persisted time block."""

    id: UUID
    task_id: UUID
    start_time: datetime
    end_time: datetime

    model_config = ConfigDict(from_attributes=True)


class TaskTimeBlocks(BaseModel):
    """A task together with its time blocks inside a queried window."""

    id: UUID
    name: str
    status: str
    time_blocks: list[TimeBlock] = Field(default_factory=list)
