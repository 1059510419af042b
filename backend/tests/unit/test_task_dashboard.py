"""
Unit tests for the today view and period dashboard helpers.
"""

from datetime import date, datetime, time, timedelta
from uuid import uuid4

import pytest

from nutshell.core.exceptions import ErrorCode, IllegalArgumentError
from nutshell.models.enums import TaskStatus, TodayTaskType
from nutshell.models.task import DeadLine, Task
from nutshell.services.task_dashboard import (
    build_dashboard,
    parse_today_type,
    resolve_period,
    select_in_progress,
    select_upcoming,
)

TODAY = date(2024, 6, 5)  # Wednesday


def _make_task(
    index: int,
    status: TaskStatus = TaskStatus.TODO,
    deadline: DeadLine | None = None,
    assigned_date: date | None = None,
    end_date: date | None = None,
) -> Task:
    created = datetime(2024, 5, 1, 9, 0) + timedelta(minutes=index)
    return Task(
        id=uuid4(),
        user_id="test_user",
        name=f"Task {index}",
        status=status,
        deadline=deadline,
        assigned_date=assigned_date,
        end_date=end_date,
        created_at=created,
        updated_at=created,
    )


def test_parse_today_type():
    assert parse_today_type("upcoming") == TodayTaskType.UPCOMING
    assert parse_today_type("inprogress") == TodayTaskType.IN_PROGRESS

    with pytest.raises(IllegalArgumentError) as exc_info:
        parse_today_type("later")
    assert exc_info.value.code == ErrorCode.INVALID_ARGUMENTS


def test_upcoming_keeps_open_tasks_due_within_window_soonest_first():
    later = _make_task(0, deadline=DeadLine(date=TODAY + timedelta(days=6)))
    today_evening = _make_task(1, deadline=DeadLine(date=TODAY, time=time(18, 0)))
    today_morning = _make_task(2, deadline=DeadLine(date=TODAY, time=time(9, 0)))
    too_far = _make_task(3, deadline=DeadLine(date=TODAY + timedelta(days=7)))
    past = _make_task(4, deadline=DeadLine(date=TODAY - timedelta(days=1)))
    done = _make_task(5, deadline=DeadLine(date=TODAY), end_date=TODAY)
    undated = _make_task(6)

    result = select_upcoming(
        [later, today_evening, today_morning, too_far, past, done, undated], TODAY, 7
    )

    assert result == [today_morning, today_evening, later]


def test_in_progress_keeps_open_tasks_planned_up_to_today():
    started = _make_task(0, TaskStatus.IN_PROGRESS, assigned_date=TODAY - timedelta(days=2))
    today = _make_task(1, TaskStatus.IN_PROGRESS, assigned_date=TODAY)
    tomorrow = _make_task(2, TaskStatus.IN_PROGRESS, assigned_date=TODAY + timedelta(days=1))
    todo = _make_task(3, TaskStatus.TODO, assigned_date=TODAY)

    assert select_in_progress([started, today, tomorrow, todo], TODAY) == [started, today]


def test_resolve_period_defaults_to_current_week_or_month():
    assert resolve_period(TODAY, None, None, False) == (date(2024, 6, 3), date(2024, 6, 9))
    assert resolve_period(TODAY, None, None, True) == (date(2024, 6, 1), date(2024, 6, 30))
    assert resolve_period(TODAY, date(2024, 2, 10), None, True) == (
        date(2024, 2, 10),
        date(2024, 2, 29),
    )
    assert resolve_period(TODAY, date(2024, 6, 1), None, False) == (
        date(2024, 6, 1),
        date(2024, 6, 7),
    )


def test_resolve_period_rejects_reversed_range():
    with pytest.raises(IllegalArgumentError) as exc_info:
        resolve_period(TODAY, date(2024, 6, 10), date(2024, 6, 1), False)

    assert exc_info.value.code == ErrorCode.INVALID_ARGUMENTS


def test_build_dashboard_counts_per_day():
    start, end = date(2024, 6, 3), date(2024, 6, 9)
    planned = _make_task(0, assigned_date=date(2024, 6, 3))
    finished = _make_task(
        1, TaskStatus.DONE, assigned_date=date(2024, 6, 3), end_date=date(2024, 6, 4)
    )
    done_from_staging = _make_task(2, TaskStatus.DONE, end_date=date(2024, 6, 9))
    outside = _make_task(3, assigned_date=date(2024, 6, 10))

    dashboard = build_dashboard([planned, finished, done_from_staging, outside], start, end)

    assert [d.date for d in dashboard.days] == [start + timedelta(days=i) for i in range(7)]
    assert dashboard.days[0].assigned == 2
    assert dashboard.days[1].completed == 1
    assert dashboard.days[6].completed == 1
    assert dashboard.total_assigned == 2
    assert dashboard.total_completed == 2
    assert dashboard.completion_rate == 0.5


def test_build_dashboard_without_tasks_has_zero_rate():
    dashboard = build_dashboard([], date(2024, 6, 1), date(2024, 6, 1))

    assert len(dashboard.days) == 1
    assert dashboard.total_assigned == 0
    assert dashboard.completion_rate == 0.0
