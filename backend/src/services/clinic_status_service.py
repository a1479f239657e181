"""
Clinic operating-status evaluation.

Pure functions over a clinic's weekly hours and date overrides:

- ``evaluate_clinic_status``: open / closed / opening-soon / closing-soon
- ``is_clinic_open``: plain open-interval check
- ``get_next_opening_time``: next opening instant within a week

All decisions are made on Malaysia wall-clock time. A date override
replaces the weekly schedule for its whole date.
"""

import logging
from datetime import datetime, date, timedelta
from typing import Iterable, List, Optional, Sequence

from core.constants import STATUS_SOON_WINDOW_MINUTES, NEXT_OPENING_LOOKAHEAD_DAYS
from shared_types.opening_hours import ClinicStatus, DateOverride, WeeklyHours
from utils.datetime_utils import (
    combine_malaysia,
    ensure_malaysia,
    malaysia_now,
    minute_distance,
    minutes_of_day,
)

logger = logging.getLogger(__name__)


def _local_now(now: Optional[datetime]) -> datetime:
    local = ensure_malaysia(now) if now is not None else malaysia_now()
    assert local is not None
    return local


def _is_within_window(current: int, target: str) -> bool:
    return minute_distance(current, minutes_of_day(target)) <= STATUS_SOON_WINDOW_MINUTES


def _is_inside(current: int, open_time: str, close_time: str) -> bool:
    return minutes_of_day(open_time) <= current <= minutes_of_day(close_time)


def find_override(overrides: Iterable[DateOverride], day: date) -> Optional[DateOverride]:
    """Return the first override for ``day``; later duplicates are ignored."""
    for override in overrides:
        if override.date == day:
            return override
    return None


def _shifts_for_day(weekly_hours: Iterable[WeeklyHours], day_of_week: int) -> List[WeeklyHours]:
    return [shift for shift in weekly_hours if shift.day_of_week == day_of_week]


def _status_for_window(current: int, open_time: str, close_time: str) -> Optional[ClinicStatus]:
    # Closing-soon is checked before opening-soon: with a short shift both can match
    if _is_within_window(current, close_time):
        return ClinicStatus.CLOSING_SOON
    if _is_within_window(current, open_time):
        return ClinicStatus.OPENING_SOON
    if _is_inside(current, open_time, close_time):
        return ClinicStatus.OPEN
    return None


def evaluate_clinic_status(
    weekly_hours: Sequence[WeeklyHours],
    overrides: Sequence[DateOverride],
    now: Optional[datetime] = None,
) -> ClinicStatus:
    """
    Compute the display status of a clinic at ``now``.

    Args:
        weekly_hours: Recurring shifts (several per day allowed)
        overrides: Date-specific exceptions; the first one matching today wins
        now: Reference instant, defaults to the current Malaysia time. Naive
            values are taken as Malaysia wall-clock time.

    Returns:
        ClinicStatus. Shifts are checked in the order given and the first
        one that yields a status decides.
    """
    local = _local_now(now)
    current = local.hour * 60 + local.minute

    override = find_override(overrides, local.date())
    if override is not None:
        if override.is_closed or not override.has_times:
            return ClinicStatus.CLOSED
        assert override.open_time is not None and override.close_time is not None
        return _status_for_window(current, override.open_time, override.close_time) or ClinicStatus.CLOSED

    shifts = _shifts_for_day(weekly_hours, local.weekday())
    for shift in shifts:
        if not shift.has_times:
            continue
        assert shift.open_time is not None and shift.close_time is not None
        status = _status_for_window(current, shift.open_time, shift.close_time)
        if status is not None:
            return status

    return ClinicStatus.CLOSED


def is_clinic_open(
    weekly_hours: Sequence[WeeklyHours],
    overrides: Sequence[DateOverride],
    now: Optional[datetime] = None,
) -> bool:
    """Whether ``now`` falls inside an opening window (no soon-states)."""
    local = _local_now(now)
    current = local.hour * 60 + local.minute

    override = find_override(overrides, local.date())
    if override is not None:
        if override.is_closed or not override.has_times:
            return False
        assert override.open_time is not None and override.close_time is not None
        return _is_inside(current, override.open_time, override.close_time)

    return any(
        _is_inside(current, shift.open_time, shift.close_time)  # type: ignore[arg-type]
        for shift in _shifts_for_day(weekly_hours, local.weekday())
        if shift.has_times
    )


def _opening_times_for_date(
    weekly_hours: Sequence[WeeklyHours],
    overrides: Sequence[DateOverride],
    day: date,
) -> List[str]:
    override = find_override(overrides, day)
    if override is not None:
        if override.is_closed or not override.has_times:
            return []
        return [override.open_time]  # type: ignore[list-item]
    return sorted(
        shift.open_time for shift in _shifts_for_day(weekly_hours, day.weekday())  # type: ignore[misc]
        if shift.has_times
    )


def get_next_opening_time(
    weekly_hours: Sequence[WeeklyHours],
    overrides: Sequence[DateOverride],
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Find the next time the clinic opens after ``now``.

    Today's remaining openings are considered first, then each of the next
    seven days. Overrides replace the weekly hours for their date and a
    closed override skips the day entirely.

    Returns:
        Malaysia-timezone datetime of the next opening, or None when the
        clinic has no opening in the coming week.
    """
    local = _local_now(now)
    current = local.hour * 60 + local.minute
    today = local.date()

    for open_time in _opening_times_for_date(weekly_hours, overrides, today):
        if minutes_of_day(open_time) > current:
            return combine_malaysia(today, open_time)

    for offset in range(1, NEXT_OPENING_LOOKAHEAD_DAYS + 1):
        day = today + timedelta(days=offset)
        opening_times = _opening_times_for_date(weekly_hours, overrides, day)
        if opening_times:
            return combine_malaysia(day, opening_times[0])

    return None
