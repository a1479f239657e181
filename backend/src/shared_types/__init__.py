"""
Shared type definitions for the dental directory backend.

This module contains dataclasses and types that are used across multiple services.
"""

from shared_types.opening_hours import (
    ClinicStatus,
    DateOverride,
    OpeningHoursValidationError,
    STATUS_DISPLAY,
    WeeklyHours,
)

__all__ = [
    "ClinicStatus",
    "DateOverride",
    "OpeningHoursValidationError",
    "STATUS_DISPLAY",
    "WeeklyHours",
]
