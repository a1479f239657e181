"""
Utility functions for consistent clinic queries with active status filtering.

Listing pages only ever show active clinics, so the filter lives in one
place and is reused by the services, the status monitor and the API.
"""

from typing import List
from sqlalchemy.orm import Session, Query

from models import Clinic


def filter_active_clinics(query: Query[Clinic]) -> Query[Clinic]:
    """Apply the active-listing filter to a clinic query."""
    return query.filter(Clinic.is_active == True)  # noqa: E712


def get_clinic_by_id_with_active_check(
    db: Session,
    clinic_id: int,
    require_active: bool = True
) -> Clinic:
    """
    Get clinic by ID with optional active status filtering.

    Args:
        db: Database session
        clinic_id: Clinic ID
        require_active: If True, only return active clinics

    Returns:
        Clinic object

    Raises:
        ValueError: If clinic not found or not active (when required)
    """
    query = db.query(Clinic).filter(Clinic.id == clinic_id)

    if require_active:
        query = filter_active_clinics(query)

    clinic = query.first()
    if not clinic:
        if require_active:
            raise ValueError("Clinic not found or not active")
        raise ValueError("Clinic not found")

    return clinic


def get_all_active_clinics(db: Session) -> List[Clinic]:
    """Get all active clinics ordered by name."""
    query = db.query(Clinic)
    return filter_active_clinics(query).order_by(Clinic.name, Clinic.id).all()
