"""
Utility functions for timetable management
Time-of-day strings, calendar dates and identifiers
"""
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Union

from django.core.validators import RegexValidator

from core.exceptions import FormatError


TIME_PATTERN = re.compile(r'^([01]?[0-9]|2[0-3]):[0-5][0-9]$')

# Stored times are always zero-padded so string order is chronological
STORED_TIME_PATTERN = re.compile(r'^([01][0-9]|2[0-3]):[0-5][0-9]$')

ISO_DATE_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}([T ]|$)')

MINUTES_PER_DAY = 24 * 60

time_format_validator = RegexValidator(
    STORED_TIME_PATTERN,
    "Please enter a valid time in HH:MM format (24-hour)"
)


class TimeOrder(str, Enum):
    BEFORE = 'before'
    EQUAL = 'equal'
    AFTER = 'after'


def is_valid_time(value: Any) -> bool:
    return isinstance(value, str) and bool(TIME_PATTERN.match(value))


def parse_time(value: Any) -> str:
    """
    Validate a wall-clock time and return it zero-padded

    Args:
        value: String in "HH:MM" 24-hour format ("9:05" is accepted)

    Returns:
        Normalised "HH:MM" string, safe for lexicographic comparison

    Raises:
        FormatError: If the value is not a valid time
    """
    if not is_valid_time(value):
        raise FormatError(
            f"Invalid time '{value}'. Use HH:MM (24-hour format)",
            details={'value': str(value)}
        )
    hours, minutes = value.split(':')
    return f"{int(hours):02d}:{minutes}"


def compare_times(a: str, b: str) -> TimeOrder:
    """Compare two normalised times"""
    if a < b:
        return TimeOrder.BEFORE
    if a > b:
        return TimeOrder.AFTER
    return TimeOrder.EQUAL


def is_before(a: str, b: str) -> bool:
    return compare_times(a, b) is TimeOrder.BEFORE


def overlaps(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """
    Check whether two half-open intervals [start, end) share an instant

    Back-to-back intervals (10:00-11:00 and 11:00-12:00) do not overlap.
    """
    return start_a < end_b and start_b < end_a


def time_to_minutes(value: str) -> int:
    hours, minutes = parse_time(value).split(':')
    return int(hours) * 60 + int(minutes)


def minutes_to_time(minutes: int) -> str:
    if minutes < 0 or minutes >= MINUTES_PER_DAY:
        raise FormatError(f"{minutes} minutes is outside a single day")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def day_of_week(value: date) -> int:
    """Day number with Sunday=0, Monday=1, ..., Saturday=6"""
    return value.isoweekday() % 7


def parse_date(value: Union[str, date, datetime]) -> date:
    """
    Convert an ISO-8601 string, date or datetime into a calendar date

    Time of day is dropped, so bookings always sit on midnight of their day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str) and ISO_DATE_PATTERN.match(value):
        try:
            if len(value) == 10:
                return date.fromisoformat(value)
            # fromisoformat only understands a trailing "Z" from Python 3.11
            return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
        except ValueError:
            pass
    raise FormatError(f"Invalid date '{value}'. Use YYYY-MM-DD", details={'value': str(value)})


def parse_object_id(value: Any, label: str = 'ID') -> int:
    """
    Convert an incoming identifier into a primary key

    Raises:
        FormatError: If the identifier is not a positive integer
    """
    if isinstance(value, bool):
        raise FormatError(f"Invalid {label} format")
    try:
        object_id = int(value)
    except (TypeError, ValueError):
        raise FormatError(f"Invalid {label} format", details={'value': str(value)})
    if object_id <= 0:
        raise FormatError(f"Invalid {label} format", details={'value': str(value)})
    return object_id
