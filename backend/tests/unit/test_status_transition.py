"""
Unit tests for task status transitions.
"""

from datetime import date

import pytest

from nutshell.core.exceptions import ErrorCode, IllegalArgumentError
from nutshell.models.enums import SchedulePhase, TaskStatus
from nutshell.models.task import ScheduleState
from nutshell.services.status_transition import apply_status_change

DAY = date(2024, 6, 1)
OTHER_DAY = date(2024, 6, 3)


def test_complete_unscheduled_task_keeps_assigned_date_empty():
    state = ScheduleState()

    result = apply_status_change(state, "완료", DAY)

    assert result.status == TaskStatus.DONE
    assert result.end_date == DAY
    assert result.assigned_date is None
    assert result.phase == SchedulePhase.COMPLETED


def test_complete_scheduled_task_keeps_assigned_date():
    state = ScheduleState(status=TaskStatus.IN_PROGRESS, assigned_date=DAY)

    result = apply_status_change(state, "완료", OTHER_DAY)

    assert result.assigned_date == DAY
    assert result.end_date == OTHER_DAY


@pytest.mark.parametrize(
    "state",
    [
        ScheduleState(),
        ScheduleState(status=TaskStatus.IN_PROGRESS, assigned_date=DAY),
        ScheduleState(status=TaskStatus.DONE, assigned_date=DAY, end_date=DAY),
    ],
)
@pytest.mark.parametrize("label", ["진행 전", "진행 중", "완료", "unknown"])
def test_no_target_date_resets_to_staging(state, label):
    result = apply_status_change(state, label, None)

    assert result == ScheduleState(status=TaskStatus.TODO)
    assert result.phase == SchedulePhase.STAGED


def test_unscheduled_task_is_placed_on_target_day():
    result = apply_status_change(ScheduleState(), "진행 중", DAY)

    assert result.status == TaskStatus.IN_PROGRESS
    assert result.assigned_date == DAY
    assert result.end_date is None
    assert result.phase == SchedulePhase.PLANNED


def test_uncompleting_clears_end_date_only():
    state = ScheduleState(status=TaskStatus.DONE, assigned_date=DAY, end_date=DAY)

    result = apply_status_change(state, "진행 전", OTHER_DAY)

    assert result.status == TaskStatus.TODO
    assert result.end_date is None
    assert result.assigned_date == DAY


def test_scheduled_task_keeps_its_day():
    state = ScheduleState(status=TaskStatus.TODO, assigned_date=DAY)

    result = apply_status_change(state, "진행 중", OTHER_DAY)

    assert result.status == TaskStatus.IN_PROGRESS
    assert result.assigned_date == DAY


def test_unknown_label_with_target_date_is_rejected():
    with pytest.raises(IllegalArgumentError) as exc_info:
        apply_status_change(ScheduleState(), "done", DAY)

    assert exc_info.value.code == ErrorCode.INVALID_ARGUMENTS
