"""
Services package for shared business logic.

This package contains the opening-hours service, the pure status
evaluator and the background status monitor shared by the API endpoints.
"""

from .opening_hours_service import OpeningHoursService
from .clinic_status_monitor import ClinicStatusMonitor

__all__ = [
    "OpeningHoursService",
    "ClinicStatusMonitor",
]
