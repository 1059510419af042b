"""
Today view and period dashboard.

Pure functions over task lists; TaskService loads the tasks and the locale
"today".
"""

import calendar
from datetime import date, timedelta
from typing import Optional

from nutshell.core.exceptions import ErrorCode, IllegalArgumentError
from nutshell.models.enums import TaskStatus, TodayTaskType
from nutshell.models.task import DailyTaskCount, Task, TaskDashboard


def parse_today_type(value: str) -> TodayTaskType:
    """
    Parse the today panel type.

    Raises:
        IllegalArgumentError: If the type is not supported
    """
    try:
        return TodayTaskType(value)
    except ValueError as e:
        raise IllegalArgumentError(
            ErrorCode.INVALID_ARGUMENTS, f"Unsupported today type: {value}"
        ) from e


def select_upcoming(tasks: list[Task], today: date, days: int) -> list[Task]:
    """Open tasks due from today through the next ``days - 1`` days, soonest first."""
    last_day = today + timedelta(days=days - 1)
    upcoming = [
        t
        for t in tasks
        if t.end_date is None
        and t.deadline is not None
        and today <= t.deadline.date <= last_day
    ]
    upcoming.sort(key=lambda t: t.deadline.as_datetime())
    return upcoming


def select_in_progress(tasks: list[Task], today: date) -> list[Task]:
    """Open IN_PROGRESS tasks planned on today or earlier."""
    return [
        t
        for t in tasks
        if t.status == TaskStatus.IN_PROGRESS
        and t.end_date is None
        and t.assigned_date is not None
        and t.assigned_date <= today
    ]


def resolve_period(
    today: date,
    start_date: Optional[date],
    end_date: Optional[date],
    is_month: bool,
) -> tuple[date, date]:
    """
    Fill in the dashboard period.

    Without a start date the period is the week (Monday to Sunday) or the
    month containing ``today``. Without an end date it runs one week, or to
    the end of the start date's month.

    Raises:
        IllegalArgumentError: If start_date is after end_date
    """
    if start_date is None:
        if is_month:
            start_date = today.replace(day=1)
        else:
            start_date = today - timedelta(days=today.weekday())

    if end_date is None:
        if is_month:
            last = calendar.monthrange(start_date.year, start_date.month)[1]
            end_date = start_date.replace(day=last)
        else:
            end_date = start_date + timedelta(days=6)

    if start_date > end_date:
        raise IllegalArgumentError(
            ErrorCode.INVALID_ARGUMENTS,
            f"start_date {start_date} is after end_date {end_date}",
        )
    return start_date, end_date


def build_dashboard(tasks: list[Task], start_date: date, end_date: date) -> TaskDashboard:
    """
    Count tasks per day over [start_date, end_date].

    ``assigned`` counts tasks planned on the day and ``completed`` counts tasks
    completed on it. A task planned and completed inside the period counts
    once in each.
    """
    days = {}
    day = start_date
    while day <= end_date:
        days[day] = DailyTaskCount(date=day)
        day += timedelta(days=1)

    planned_done = 0
    for task in tasks:
        if task.assigned_date in days:
            days[task.assigned_date].assigned += 1
            if task.end_date is not None:
                planned_done += 1
        if task.end_date in days:
            days[task.end_date].completed += 1

    total_assigned = sum(d.assigned for d in days.values())
    total_completed = sum(d.completed for d in days.values())
    rate = round(planned_done / total_assigned, 2) if total_assigned else 0.0
    return TaskDashboard(
        start_date=start_date,
        end_date=end_date,
        days=list(days.values()),
        total_assigned=total_assigned,
        total_completed=total_completed,
        completion_rate=rate,
    )
