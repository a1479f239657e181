# Package initialization
# Import all models to ensure relationships are properly established
from .clinic import Clinic
from .clinic_hours import ClinicHours
from .clinic_special_hours import ClinicSpecialHours

__all__ = [
    "Clinic",
    "ClinicHours",
    "ClinicSpecialHours",
]
