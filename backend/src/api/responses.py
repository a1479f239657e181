"""
Shared response models for API endpoints.

This module contains Pydantic models shared by the public clinic endpoints
and the admin hours endpoints.
"""

from datetime import datetime, date
from typing import List, Optional

from pydantic import BaseModel

from shared_types.opening_hours import ClinicStatus, DateOverride, STATUS_DISPLAY, WeeklyHours


class WeeklyHoursResponse(BaseModel):
    """Response model for one weekly shift."""
    day_of_week: int  # 0=Monday, 6=Sunday
    open_time: Optional[str] = None  # "HH:MM"
    close_time: Optional[str] = None  # "HH:MM"

    @classmethod
    def from_weekly_hours(cls, hours: WeeklyHours) -> "WeeklyHoursResponse":
        return cls(**hours.to_dict())


class SpecialHoursResponse(BaseModel):
    """Response model for a date override."""
    date: date
    is_closed: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None

    @classmethod
    def from_override(cls, override: DateOverride) -> "SpecialHoursResponse":
        return cls(
            date=override.date,
            is_closed=override.is_closed,
            open_time=override.open_time,
            close_time=override.close_time,
        )


class ClinicHoursResponse(BaseModel):
    """Response model for a clinic's full opening hours."""
    clinic_id: int
    hours: List[WeeklyHoursResponse]
    special_hours: List[SpecialHoursResponse]


class ClinicStatusResponse(BaseModel):
    """Response model for a clinic's live status."""
    clinic_id: int
    status: ClinicStatus
    label: str  # Badge text, e.g. "Open Now"
    color: str  # Badge colour: green / red / yellow
    is_open: bool
    next_opening_time: Optional[datetime] = None
    evaluated_at: datetime

    @classmethod
    def build(
        cls,
        clinic_id: int,
        status: ClinicStatus,
        is_open: bool,
        next_opening_time: Optional[datetime],
        evaluated_at: datetime,
    ) -> "ClinicStatusResponse":
        label, color = STATUS_DISPLAY[status]
        return cls(
            clinic_id=clinic_id,
            status=status,
            label=label,
            color=color,
            is_open=is_open,
            next_opening_time=next_opening_time,
            evaluated_at=evaluated_at,
        )


class ClinicListItemResponse(BaseModel):
    """Response model for a clinic in the listing."""
    id: int
    name: str
    slug: str
    address: Optional[str] = None
    phone: Optional[str] = None
    status: ClinicStatus
    label: str
    color: str


class ClinicListResponse(BaseModel):
    """Response model for listing clinics."""
    clinics: List[ClinicListItemResponse]
    evaluated_at: datetime
