"""
Shared types for clinic opening hours and live status.

WeeklyHours and DateOverride are validated snapshots of the
``clinic_hours`` / ``clinic_special_hours`` rows. Validation happens at
construction so the status evaluator never has to guess about malformed
input.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Union

from utils.datetime_utils import normalize_time_string, parse_date_string

if TYPE_CHECKING:
    from models.clinic_hours import ClinicHours
    from models.clinic_special_hours import ClinicSpecialHours


class OpeningHoursValidationError(ValueError):
    """Raised when opening-hours data is malformed."""


class ClinicStatus(str, Enum):
    """Display status of a clinic at a given instant."""
    OPEN = "open"
    CLOSED = "closed"
    OPENING_SOON = "opening-soon"
    CLOSING_SOON = "closing-soon"


# Badge label and colour shown on listing pages for each status
STATUS_DISPLAY: dict[ClinicStatus, tuple[str, str]] = {
    ClinicStatus.OPEN: ("Open Now", "green"),
    ClinicStatus.CLOSED: ("Closed", "red"),
    ClinicStatus.OPENING_SOON: ("Opening Soon", "yellow"),
    ClinicStatus.CLOSING_SOON: ("Closing Soon", "yellow"),
}


def _normalize_optional_time(field_name: str, value: Union[str, time, None]) -> Optional[str]:
    if value is None or value == "":
        return None
    try:
        return normalize_time_string(value)
    except ValueError as e:
        raise OpeningHoursValidationError(f"{field_name}: {e}") from e


@dataclass(frozen=True)
class WeeklyHours:
    """
    One recurring open shift.

    A clinic may have several entries for the same day (e.g. a morning and
    an evening session).
    """
    day_of_week: int  # 0=Monday, 6=Sunday
    open_time: Optional[str] = None  # "HH:MM"
    close_time: Optional[str] = None  # "HH:MM"

    def __post_init__(self) -> None:
        if isinstance(self.day_of_week, bool) or not isinstance(self.day_of_week, int) \
                or not 0 <= self.day_of_week <= 6:
            raise OpeningHoursValidationError(
                f"day_of_week must be an integer 0-6 (Monday=0), got {self.day_of_week!r}"
            )
        # Frozen dataclass: normalized values have to go through object.__setattr__
        object.__setattr__(self, "open_time", _normalize_optional_time("open_time", self.open_time))
        object.__setattr__(self, "close_time", _normalize_optional_time("close_time", self.close_time))

    @property
    def has_times(self) -> bool:
        return self.open_time is not None and self.close_time is not None

    @classmethod
    def from_model(cls, row: "ClinicHours") -> "WeeklyHours":
        return cls(day_of_week=row.day_of_week, open_time=row.open_time, close_time=row.close_time)  # type: ignore[arg-type]

    def to_dict(self) -> dict[str, Any]:
        return {
            "day_of_week": self.day_of_week,
            "open_time": self.open_time,
            "close_time": self.close_time,
        }


@dataclass(frozen=True)
class DateOverride:
    """
    A calendar-date exception (public holiday closure, special hours).

    Takes precedence over WeeklyHours for its date.
    """
    date: date
    is_closed: bool = False
    open_time: Optional[str] = None
    close_time: Optional[str] = None

    def __post_init__(self) -> None:
        value: Any = self.date
        if isinstance(value, datetime):
            value = value.date()
        elif isinstance(value, str):
            try:
                value = parse_date_string(value)
            except ValueError as e:
                raise OpeningHoursValidationError(str(e)) from e
        elif not isinstance(value, date):
            raise OpeningHoursValidationError(f"date must be a date or YYYY-MM-DD string, got {value!r}")
        object.__setattr__(self, "date", value)
        object.__setattr__(self, "is_closed", bool(self.is_closed))
        object.__setattr__(self, "open_time", _normalize_optional_time("open_time", self.open_time))
        object.__setattr__(self, "close_time", _normalize_optional_time("close_time", self.close_time))

    @property
    def has_times(self) -> bool:
        return self.open_time is not None and self.close_time is not None

    @classmethod
    def from_model(cls, row: "ClinicSpecialHours") -> "DateOverride":
        return cls(
            date=row.date,
            is_closed=bool(row.is_closed),
            open_time=row.open_time,  # type: ignore[arg-type]
            close_time=row.close_time,  # type: ignore[arg-type]
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "is_closed": self.is_closed,
            "open_time": self.open_time,
            "close_time": self.close_time,
        }
