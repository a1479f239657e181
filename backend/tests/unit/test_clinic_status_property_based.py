"""
Property-based tests for clinic status evaluation.

These tests verify invariants that must hold for any schedule and any
instant. Uses Hypothesis for property-based testing.
"""

from datetime import datetime, timedelta, timezone

from hypothesis import given, strategies as st

from services.clinic_status_service import (
    evaluate_clinic_status,
    get_next_opening_time,
    is_clinic_open,
)
from shared_types.opening_hours import ClinicStatus, DateOverride, WeeklyHours
from utils.datetime_utils import MALAYSIA_TZ, minute_distance, minutes_of_day


def _hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


minutes = st.integers(min_value=0, max_value=1439)

instants = st.datetimes(
    min_value=datetime(2024, 1, 1),
    max_value=datetime(2026, 12, 31),
)


@st.composite
def shifts(draw):
    """A same-day shift with open < close."""
    open_minute = draw(st.integers(min_value=0, max_value=1438))
    close_minute = draw(st.integers(min_value=open_minute + 1, max_value=1439))
    return WeeklyHours(
        day_of_week=draw(st.integers(min_value=0, max_value=6)),
        open_time=_hhmm(open_minute),
        close_time=_hhmm(close_minute),
    )


schedules = st.lists(shifts(), max_size=10)


class TestStatusProperties:
    """Invariants of evaluate_clinic_status."""

    @given(schedules, instants)
    def test_always_returns_a_status(self, weekly, now):
        assert evaluate_clinic_status(weekly, [], now) in set(ClinicStatus)

    @given(schedules, instants)
    def test_is_deterministic(self, weekly, now):
        assert evaluate_clinic_status(weekly, [], now) == evaluate_clinic_status(weekly, [], now)

    @given(instants)
    def test_empty_schedule_is_always_closed(self, now):
        assert evaluate_clinic_status([], [], now) == ClinicStatus.CLOSED

    @given(schedules, instants)
    def test_closed_override_always_wins(self, weekly, now):
        overrides = [DateOverride(date=now.date(), is_closed=True)]
        assert evaluate_clinic_status(weekly, overrides, now) == ClinicStatus.CLOSED
        assert is_clinic_open(weekly, overrides, now) is False

    @given(schedules, instants)
    def test_open_status_implies_inside_a_window(self, weekly, now):
        if evaluate_clinic_status(weekly, [], now) == ClinicStatus.OPEN:
            assert is_clinic_open(weekly, [], now) is True

    @given(schedules, instants)
    def test_soon_status_implies_a_nearby_boundary(self, weekly, now):
        status = evaluate_clinic_status(weekly, [], now)
        current = now.hour * 60 + now.minute
        today = [s for s in weekly if s.day_of_week == now.weekday()]

        if status == ClinicStatus.CLOSING_SOON:
            assert any(minute_distance(current, minutes_of_day(s.close_time)) <= 30 for s in today)
        if status == ClinicStatus.OPENING_SOON:
            assert any(minute_distance(current, minutes_of_day(s.open_time)) <= 30 for s in today)

    @given(schedules, instants, st.integers(min_value=-12, max_value=14))
    def test_same_instant_in_any_timezone_gives_same_status(self, weekly, now, offset_hours):
        instant = now.replace(tzinfo=MALAYSIA_TZ)
        elsewhere = instant.astimezone(timezone(timedelta(hours=offset_hours)))
        assert evaluate_clinic_status(weekly, [], instant) == evaluate_clinic_status(weekly, [], elsewhere)


class TestNextOpeningProperties:
    """Invariants of get_next_opening_time."""

    @given(schedules, instants)
    def test_next_opening_is_in_the_future_within_a_week(self, weekly, now):
        result = get_next_opening_time(weekly, [], now)
        local_now = now.replace(tzinfo=MALAYSIA_TZ)

        if result is None:
            assert weekly == []
        else:
            assert result > local_now
            assert result - local_now <= timedelta(days=8)
            assert _hhmm(result.hour * 60 + result.minute) in {s.open_time for s in weekly}

    @given(st.lists(shifts(), min_size=1, max_size=10), instants)
    def test_any_weekly_shift_yields_an_opening(self, weekly, now):
        assert get_next_opening_time(weekly, [], now) is not None
