"""
Unit tests for datetime utilities.

Tests Malaysia timezone handling and the wall-clock helpers used by the
opening-hours logic.
"""

import pytest
from datetime import date, datetime, time, timezone, timedelta

from utils.datetime_utils import (
    MALAYSIA_TZ,
    combine_malaysia,
    ensure_malaysia,
    malaysia_now,
    minute_distance,
    minutes_of_day,
    normalize_time_string,
    parse_date_string,
    parse_datetime_to_malaysia,
    parse_time_string,
)


class TestMalaysiaTimezone:
    """Test Malaysia timezone utilities."""

    def test_malaysia_now_returns_timezone_aware_datetime(self):
        """Test that malaysia_now returns timezone-aware datetime."""
        now = malaysia_now()

        assert now.tzinfo is not None
        assert now.tzinfo == MALAYSIA_TZ

    def test_malaysia_tz_is_utc_plus_8(self):
        """Test that Malaysia timezone is UTC+8."""
        assert MALAYSIA_TZ.utcoffset(None).total_seconds() == 8 * 3600


class TestEnsureMalaysia:
    """Test ensure_malaysia function."""

    def test_naive_datetime_is_taken_as_malaysia_time(self):
        """Test ensure_malaysia with naive datetime."""
        result = ensure_malaysia(datetime(2025, 1, 6, 10, 0, 0))

        assert result.tzinfo == MALAYSIA_TZ
        assert (result.year, result.month, result.day, result.hour) == (2025, 1, 6, 10)

    def test_utc_datetime_is_converted(self):
        """Test UTC 02:00 converts to Malaysia 10:00."""
        result = ensure_malaysia(datetime(2025, 1, 6, 2, 0, 0, tzinfo=timezone.utc))

        assert result.tzinfo == MALAYSIA_TZ
        assert result.hour == 10

    def test_conversion_can_change_date(self):
        """Test that late UTC evenings land on the next Malaysia date."""
        result = ensure_malaysia(datetime(2025, 1, 5, 20, 0, tzinfo=timezone.utc))

        assert result.date() == date(2025, 1, 6)
        assert result.hour == 4

    def test_other_timezone_is_converted(self):
        """Test ensure_malaysia converts from EST (UTC-5)."""
        est = timezone(timedelta(hours=-5))
        result = ensure_malaysia(datetime(2025, 1, 5, 21, 0, tzinfo=est))

        assert result.date() == date(2025, 1, 6)
        assert result.hour == 10

    def test_none(self):
        """Test ensure_malaysia with None returns None."""
        assert ensure_malaysia(None) is None


class TestParseDatetimeToMalaysia:
    """Test parse_datetime_to_malaysia."""

    def test_parses_offset_string(self):
        result = parse_datetime_to_malaysia("2025-01-06T09:30:00+08:00")
        assert result == datetime(2025, 1, 6, 9, 30, tzinfo=MALAYSIA_TZ)

    def test_parses_z_suffix(self):
        result = parse_datetime_to_malaysia("2025-01-06T01:30:00Z")
        assert result == datetime(2025, 1, 6, 9, 30, tzinfo=MALAYSIA_TZ)

    def test_naive_string_is_malaysia_time(self):
        result = parse_datetime_to_malaysia("2025-01-06T09:30:00")
        assert result.tzinfo == MALAYSIA_TZ
        assert result.hour == 9

    def test_datetime_passthrough(self):
        value = datetime(2025, 1, 6, 1, 30, tzinfo=timezone.utc)
        assert parse_datetime_to_malaysia(value).hour == 9

    def test_invalid_string_raises(self):
        with pytest.raises(ValueError, match="Invalid datetime string format"):
            parse_datetime_to_malaysia("next tuesday")


class TestParseTimeString:
    """Test wall-clock time parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("09:00", time(9, 0)),
        ("00:00", time(0, 0)),
        ("23:59", time(23, 59)),
        ("17:30:45", time(17, 30)),
        (" 08:15 ", time(8, 15)),
    ])
    def test_valid(self, value, expected):
        assert parse_time_string(value) == expected

    @pytest.mark.parametrize("value", [
        "9:00", "24:00", "12:60", "12:00:60", "noon", "", "12-00", "1200",
    ])
    def test_invalid(self, value):
        with pytest.raises(ValueError, match="Invalid time format"):
            parse_time_string(value)

    def test_non_string_is_rejected(self):
        with pytest.raises(ValueError):
            parse_time_string(900)  # type: ignore[arg-type]


class TestMinuteHelpers:
    """Test minute-of-day conversions and circular distance."""

    def test_normalize_time_string(self):
        assert normalize_time_string("09:05:59") == "09:05"
        assert normalize_time_string(time(7, 3)) == "07:03"

    def test_minutes_of_day(self):
        assert minutes_of_day("00:00") == 0
        assert minutes_of_day("09:30") == 570
        assert minutes_of_day(time(23, 59)) == 1439
        assert minutes_of_day(datetime(2025, 1, 6, 1, 2)) == 62

    def test_minute_distance_is_symmetric(self):
        assert minute_distance(540, 570) == 30
        assert minute_distance(570, 540) == 30

    def test_minute_distance_wraps_midnight(self):
        # 23:55 and 00:10
        assert minute_distance(1435, 10) == 15
        assert minute_distance(0, 1439) == 1

    def test_minute_distance_never_exceeds_half_day(self):
        assert minute_distance(0, 720) == 720
        assert minute_distance(60, 840) == 660

    def test_combine_malaysia(self):
        result = combine_malaysia(date(2025, 1, 6), "09:00")
        assert result == datetime(2025, 1, 6, 9, 0, tzinfo=MALAYSIA_TZ)
        assert combine_malaysia(date(2025, 1, 6), time(14, 30)).hour == 14


class TestParseDateString:
    """Test parse_date_string."""

    @pytest.mark.parametrize("value", ["2025-01-29", "2025/01/29", "2025-1-29", " 2025/1/29 "])
    def test_valid_formats(self, value):
        assert parse_date_string(value) == date(2025, 1, 29)

    @pytest.mark.parametrize("value", ["", "   ", "20250129", "2025-02-30", "2025-01", "29.01.2025"])
    def test_invalid_formats(self, value):
        with pytest.raises(ValueError):
            parse_date_string(value)
