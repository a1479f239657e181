"""
Datetime utilities for consistent timezone handling across the application.

All clinics in the directory are in Malaysia, so every business-hours
decision is made on Malaysia wall-clock time (UTC+8) regardless of the
server's own timezone. Time-of-day arithmetic uses minute-of-day integers.
"""

import logging
import re
from datetime import datetime, timezone, timedelta, date, time
from typing import Optional, Union

from core.constants import MINUTES_PER_DAY

logger = logging.getLogger(__name__)

# Malaysia timezone constant (UTC+8, no daylight saving)
MALAYSIA_TZ = timezone(timedelta(hours=8))

_TIME_PATTERN = re.compile(r"^(\d{2}):(\d{2})(?::(\d{2}))?$")


def malaysia_now() -> datetime:
    """
    Get current Malaysia datetime (UTC+8).

    Returns:
        Current datetime with Malaysia timezone
    """
    return datetime.now(MALAYSIA_TZ)


def ensure_malaysia(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure a datetime is timezone-aware with Malaysia timezone.

    Naive datetimes are taken to already be Malaysia wall-clock time.

    Args:
        dt: Datetime to normalize

    Returns:
        Timezone-aware datetime in Malaysia timezone, or None if input is None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=MALAYSIA_TZ)
    return dt.astimezone(MALAYSIA_TZ)


def parse_datetime_to_malaysia(v: Union[str, datetime]) -> datetime:
    """
    Parse an ISO datetime string (or pass through a datetime) in Malaysia time.

    Accepts "2025-01-01T09:00:00+08:00", "...Z" and naive strings; naive
    values are taken as Malaysia time.

    Raises:
        ValueError: If the string cannot be parsed
    """
    if isinstance(v, datetime):
        result = ensure_malaysia(v)
        assert result is not None
        return result

    try:
        parsed = datetime.fromisoformat(v.strip().replace('Z', '+00:00'))
    except ValueError as e:
        raise ValueError(f"Invalid datetime string format: {v}") from e

    result = ensure_malaysia(parsed)
    assert result is not None
    return result


def parse_time_string(value: str) -> time:
    """
    Parse a 24-hour "HH:MM" (or "HH:MM:SS") wall-clock string.

    Seconds are accepted because Postgres ``time`` columns serialize with
    them, but they are dropped: all opening-hours logic works in whole minutes.

    Raises:
        ValueError: If the string is not a valid zero-padded 24-hour time
    """
    match = _TIME_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time format (expected HH:MM): {value!r}")

    hour, minute = int(match.group(1)), int(match.group(2))
    second = int(match.group(3)) if match.group(3) is not None else 0
    if hour > 23 or minute > 59 or second > 59:
        raise ValueError(f"Invalid time format (expected HH:MM): {value!r}")
    return time(hour, minute)


def normalize_time_string(value: Union[str, time]) -> str:
    """Return a time as zero-padded "HH:MM"."""
    if isinstance(value, time):
        return f"{value.hour:02d}:{value.minute:02d}"
    parsed = parse_time_string(value)
    return f"{parsed.hour:02d}:{parsed.minute:02d}"


def minutes_of_day(value: Union[str, time, datetime]) -> int:
    """
    Convert a wall-clock time to minutes since local midnight (0-1439).

    Strings are parsed with :func:`parse_time_string`; datetimes use their
    own wall-clock fields, so convert them to Malaysia time first.
    """
    if isinstance(value, str):
        value = parse_time_string(value)
    return value.hour * 60 + value.minute


def minute_distance(a: int, b: int) -> int:
    """
    Distance in minutes between two minute-of-day values on a 24-hour clock.

    Wraps around midnight: 23:55 and 00:10 are 15 minutes apart.
    """
    diff = abs(a - b) % MINUTES_PER_DAY
    return min(diff, MINUTES_PER_DAY - diff)


def combine_malaysia(day: date, value: Union[str, time]) -> datetime:
    """Build a Malaysia-timezone datetime for a calendar date and wall-clock time."""
    if isinstance(value, str):
        value = parse_time_string(value)
    return datetime(day.year, day.month, day.day, value.hour, value.minute, tzinfo=MALAYSIA_TZ)


def parse_date_string(date_str: str) -> date:
    """
    Parse a date string in YYYY-MM-DD or YYYY/MM/DD format.

    Single-digit months/days are accepted ("2025-1-5").

    Raises:
        ValueError: If date string cannot be parsed
    """
    if not date_str or not date_str.strip():
        raise ValueError("Date string cannot be empty")

    date_str = date_str.strip()

    if '/' in date_str:
        parts = date_str.split('/')
    elif '-' in date_str:
        parts = date_str.split('-')
    else:
        raise ValueError(f"Invalid date format (expected YYYY-MM-DD or YYYY/MM/DD): {date_str}")

    if len(parts) != 3:
        raise ValueError(f"Invalid date format (expected YYYY-MM-DD or YYYY/MM/DD): {date_str}")

    normalized = f"{parts[0].zfill(4)}-{parts[1].zfill(2)}-{parts[2].zfill(2)}"

    try:
        return datetime.strptime(normalized, '%Y-%m-%d').date()
    except ValueError as e:
        raise ValueError(f"Invalid date format (expected YYYY-MM-DD or YYYY/MM/DD): {date_str}") from e
