"""Pydantic models (schemas) for the application."""

from nutshell.models.enums import SchedulePhase, TaskOrderKey, TaskStatus, TodayTaskType
from nutshell.models.task import (
    DailyTaskCount,
    DeadLine,
    ScheduleState,
    Task,
    TaskCreate,
    TaskDashboard,
    TaskDetail,
    TaskScopeQuery,
    TaskStatusChange,
    TaskSummary,
    TaskUpdate,
    TodayTasks,
)
from nutshell.models.task_order import TaskOrder, TaskOrderCreate
from nutshell.models.time_block import (
    TaskTimeBlocks,
    TimeBlock,
    TimeBlockRequest,
    TimeRange,
)
from nutshell.models.user import UserAccount, UserProfileUpdate

__all__ = [
    # Enums
    "TaskStatus",
    "SchedulePhase",
    "TaskOrderKey",
    "TodayTaskType",
    # Task
    "DeadLine",
    "ScheduleState",
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskStatusChange",
    "TaskSummary",
    "TaskDetail",
    "TaskScopeQuery",
    "TodayTasks",
    "DailyTaskCount",
    "TaskDashboard",
    # TaskOrder
    "TaskOrder",
    "TaskOrderCreate",
    # TimeBlock
    "TimeRange",
    "TimeBlockRequest",
    "TimeBlock",
    "TaskTimeBlocks",
    # User
    "UserAccount",
    "UserProfileUpdate",
]
