"""
Unit tests for time range validation.
"""

from datetime import datetime

import pytest

from nutshell.core.exceptions import BusinessLogicError, ErrorCode
from nutshell.utils.time_range import find_time_range_violation, validate_time_range


def test_valid_range_has_no_violation():
    start = datetime(2024, 6, 1, 9, 0)
    end = datetime(2024, 6, 1, 10, 45)

    assert find_time_range_violation(start, end) is None
    validate_time_range(start, end)


def test_start_after_end_is_time_conflict():
    start = datetime(2024, 6, 1, 11, 0)
    end = datetime(2024, 6, 1, 10, 0)

    assert find_time_range_violation(start, end) == ErrorCode.TIME_CONFLICT


def test_range_spanning_midnight_is_rejected():
    start = datetime(2024, 6, 1, 23, 45)
    end = datetime(2024, 6, 2, 0, 15)

    assert find_time_range_violation(start, end) == ErrorCode.NOT_SAME_DATE_CONFLICT


@pytest.mark.parametrize(
    "start, end",
    [
        (datetime(2024, 6, 1, 9, 10), datetime(2024, 6, 1, 10, 0)),
        (datetime(2024, 6, 1, 9, 0), datetime(2024, 6, 1, 10, 20)),
    ],
)
def test_unaligned_minutes_are_time_invalid(start, end):
    assert find_time_range_violation(start, end) == ErrorCode.TIME_INVALID


def test_ordering_wins_over_same_day_and_quantization():
    # Every rule is broken; the ordering rule is reported.
    start = datetime(2024, 6, 2, 9, 7)
    end = datetime(2024, 6, 1, 9, 3)

    assert find_time_range_violation(start, end) == ErrorCode.TIME_CONFLICT


def test_same_day_wins_over_quantization():
    start = datetime(2024, 6, 1, 23, 50)
    end = datetime(2024, 6, 2, 0, 5)

    assert find_time_range_violation(start, end) == ErrorCode.NOT_SAME_DATE_CONFLICT


def test_validate_raises_business_error_with_code():
    with pytest.raises(BusinessLogicError) as exc_info:
        validate_time_range(datetime(2024, 6, 1, 9, 5), datetime(2024, 6, 1, 9, 30))

    assert exc_info.value.code == ErrorCode.TIME_INVALID
    assert exc_info.value.status_code == 409
