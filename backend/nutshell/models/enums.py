"""
Enum definitions for the application.

These enums are used across models and provide type-safe status/order values.
"""

from enum import Enum

from nutshell.core.exceptions import ErrorCode, IllegalArgumentError


class TaskStatus(str, Enum):
    """Task status."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"

    @property
    def label(self) -> str:
        """Locale label shown to users."""
        return STATUS_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "TaskStatus":
        """
        Resolve a status from its locale label.

        Raises:
            IllegalArgumentError: If the label is not recognised
        """
        for status, status_label in STATUS_LABELS.items():
            if status_label == label:
                return status
        raise IllegalArgumentError(
            ErrorCode.INVALID_ARGUMENTS,
            f"Unknown task status: {label}",
        )


STATUS_LABELS: dict[TaskStatus, str] = {
    TaskStatus.TODO: "진행 전",
    TaskStatus.IN_PROGRESS: "진행 중",
    TaskStatus.DONE: "완료",
}

COMPLETED_LABEL = STATUS_LABELS[TaskStatus.DONE]


class SchedulePhase(str, Enum):
    """
    Where a task sits in the daily plan.

    STAGED = No assigned date and not completed (staging area)
    PLANNED = Assigned to a day and not completed
    COMPLETED = Has a completion date
    """

    STAGED = "STAGED"
    PLANNED = "PLANNED"
    COMPLETED = "COMPLETED"


class TaskOrderKey(str, Enum):
    """Sort keys accepted by the task list."""

    RECENT = "recent"
    OLD = "old"
    NEAR = "near"
    FAR = "far"
    USER = "user"


class TodayTaskType(str, Enum):
    """Panels of the today view."""

    UPCOMING = "upcoming"
    IN_PROGRESS = "inprogress"
