"""
Task model definitions.

Tasks are the core entity representing user's to-do items. A task is created
in the staging area and is placed on a calendar day through status changes.
"""

import datetime as dt
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from nutshell.models.enums import SchedulePhase, TaskStatus
from nutshell.models.time_block import TimeBlock
from nutshell.utils.datetime_utils import END_OF_DAY


class DeadLine(BaseModel):
    """Deadline date with an optional time of day."""

    date: dt.date
    time: Optional[dt.time] = None

    def as_datetime(self) -> datetime:
        """Deadline as a datetime; a missing time means end of day."""
        return datetime.combine(self.date, self.time or END_OF_DAY)


class ScheduleState(BaseModel):
    """
    Compound scheduling state of a task.

    status, assigned_date and end_date only ever change together through
    nutshell.services.status_transition.
    """

    model_config = ConfigDict(frozen=True)

    status: TaskStatus = TaskStatus.TODO
    assigned_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def phase(self) -> SchedulePhase:
        if self.end_date is not None:
            return SchedulePhase.COMPLETED
        if self.assigned_date is not None:
            return SchedulePhase.PLANNED
        return SchedulePhase.STAGED


class TaskCreate(BaseModel):
    """Schema for creating a new task in the staging area."""

    name: str = Field(..., min_length=1, max_length=255, description="Task name")
    description: Optional[str] = Field(None, max_length=2000, description="Task details")
    deadline: Optional[DeadLine] = Field(None, description="Deadline")


class TaskUpdate(BaseModel):
    """Schema for editing task details."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)
    deadline: Optional[DeadLine] = None


class TaskStatusChange(BaseModel):
    """Request to move a task between staging, a day and completion."""

    status: str = Field(..., description="Status label (진행 전 / 진행 중 / 완료)")
    target_date: Optional[date] = Field(
        None, description="Day the task is moved to (None = staging area)"
    )


class Task(BaseModel):
    """Complete task model with all fields."""

    id: UUID
    user_id: str
    name: str
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.TODO
    deadline: Optional[DeadLine] = None
    assigned_date: Optional[date] = None
    end_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @property
    def schedule_state(self) -> ScheduleState:
        return ScheduleState(
            status=self.status,
            assigned_date=self.assigned_date,
            end_date=self.end_date,
        )


class TaskScopeQuery(BaseModel):
    """
    Selects the tasks of one list view.

    target_date None means the staging area (no assigned date); otherwise the
    tasks assigned to that day. task_ids optionally narrows the result further.
    """

    user_id: str
    target_date: Optional[date] = None
    newest_first: bool = True
    task_ids: Optional[list[UUID]] = None


class TaskSummary(BaseModel):
    """Task row in a list view."""

    id: UUID
    name: str
    status: str
    deadline: Optional[DeadLine] = None

    @classmethod
    def from_task(cls, task: Task) -> "TaskSummary":
        return cls(
            id=task.id,
            name=task.name,
            status=task.status.label,
            deadline=task.deadline,
        )


class TaskDetail(BaseModel):
    """Task detail view, with its time block on the requested day."""

    name: str
    description: Optional[str] = None
    status: str
    deadline: Optional[DeadLine] = None
    time_block: Optional[TimeBlock] = None


class TodayTasks(BaseModel):
    """Today panel: upcoming deadlines or tasks in progress."""

    type: str
    tasks: list[TaskSummary] = Field(default_factory=list)


class DailyTaskCount(BaseModel):
    """Tasks planned on and completed on one day."""

    date: dt.date
    assigned: int = 0
    completed: int = 0


class TaskDashboard(BaseModel):
    """
    Task counts over a week or a month.

    completion_rate is the share of tasks planned in the period that are
    completed, between 0 and 1.
    """

    start_date: date
    end_date: date
    days: list[DailyTaskCount] = Field(default_factory=list)
    total_assigned: int = 0
    total_completed: int = 0
    completion_rate: float = 0.0
