"""
Time range validation for time blocks.

A time block lives inside one calendar day and both of its endpoints sit on
the 15-minute grid.
"""

from datetime import datetime
from typing import Optional

from nutshell.core.exceptions import BusinessLogicError, ErrorCode

SLOT_MINUTES = 15


def find_time_range_violation(
    start_time: datetime,
    end_time: datetime,
) -> Optional[ErrorCode]:
    """
    Return the first rule the range breaks, or None when it is valid.

    Checks run in a fixed order so the reported reason is deterministic:
    ordering, then same day, then grid alignment.
    """
    if start_time > end_time:
        return ErrorCode.TIME_CONFLICT
    if start_time.date() != end_time.date():
        return ErrorCode.NOT_SAME_DATE_CONFLICT
    if start_time.minute % SLOT_MINUTES != 0 or end_time.minute % SLOT_MINUTES != 0:
        return ErrorCode.TIME_INVALID
    return None


def validate_time_range(start_time: datetime, end_time: datetime) -> None:
    """
    Validate a candidate time block range.

    Raises:
        BusinessLogicError: TIME_CONFLICT, NOT_SAME_DATE_CONFLICT or TIME_INVALID
    """
    violation = find_time_range_violation(start_time, end_time)
    if violation is not None:
        raise BusinessLogicError(violation)
