"""
Datetime utilities.

Scheduling data is stored as naive wall-clock times in the configured locale.
These helpers produce "now"/"today" in that locale and bring aware datetimes
received at the boundary into it.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc

END_OF_DAY = time(23, 59, 59)


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def local_now(tz_name: str) -> datetime:
    """Current wall-clock time in ``tz_name``, without tzinfo."""
    return datetime.now(UTC).astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)


def local_today(tz_name: str) -> date:
    """
    Get today's date in the given timezone.

    Example:
        >>> local_today("Asia/Seoul")  # When UTC is 2024-01-19 16:00
        date(2024, 1, 20)
    """
    return local_now(tz_name).date()


def to_local_naive(dt: Optional[datetime], tz_name: str) -> Optional[datetime]:
    """
    Convert an aware datetime into naive local time.

    Naive input is assumed to already be local and is returned unchanged.
    """
    if dt is None or dt.tzinfo is None:
        return dt
    return dt.astimezone(ZoneInfo(tz_name)).replace(tzinfo=None)


def day_bounds(day: date, days: int = 1) -> tuple[datetime, datetime]:
    """Return ``(day 00:00:00, last day 23:59:59)`` for a window of ``days`` days."""
    start = datetime.combine(day, time.min)
    end = datetime.combine(day + timedelta(days=days - 1), END_OF_DAY)
    return start, end
