"""
Task status transitions.

Scheduling and completion are tracked together as a ScheduleState
(status, assigned_date, end_date). apply_status_change is the only place the
three fields change.
"""

from datetime import date
from typing import Optional

from nutshell.models.enums import COMPLETED_LABEL, TaskStatus
from nutshell.models.task import ScheduleState


def apply_status_change(
    state: ScheduleState,
    label: str,
    target_date: Optional[date],
) -> ScheduleState:
    """
    Compute the state after a status change.

    - No target date: the task goes back to the staging area. Both dates are
      cleared and the status is forced to TODO whatever the label says.
    - Completed label: end_date becomes the target date, assigned_date is kept.
    - Any other label: a completed task is un-completed (end_date cleared);
      otherwise an unscheduled task is placed on the target date. A task that
      is already scheduled keeps its assigned_date.

    Raises:
        IllegalArgumentError: If the label is unknown and a target date is given
    """
    if target_date is None:
        return ScheduleState(status=TaskStatus.TODO, assigned_date=None, end_date=None)

    status = TaskStatus.from_label(label)

    if label == COMPLETED_LABEL:
        return state.model_copy(update={"status": status, "end_date": target_date})

    if state.end_date is not None:
        return state.model_copy(update={"status": status, "end_date": None})
    if state.assigned_date is None:
        return state.model_copy(update={"status": status, "assigned_date": target_date})
    return state.model_copy(update={"status": status})
