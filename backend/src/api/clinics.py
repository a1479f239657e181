# pyright: reportMissingTypeStubs=false
"""
Public clinic endpoints: listing with live status, status detail, hours.
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi import status as http_status
from sqlalchemy.orm import Session

from api.responses import (
    ClinicHoursResponse,
    ClinicListItemResponse,
    ClinicListResponse,
    ClinicStatusResponse,
    SpecialHoursResponse,
    WeeklyHoursResponse,
)
from core.database import get_db
from models import Clinic
from services.clinic_status_monitor import get_clinic_status_monitor
from services.clinic_status_service import evaluate_clinic_status, get_next_opening_time, is_clinic_open
from services.opening_hours_service import OpeningHoursService
from shared_types.opening_hours import ClinicStatus, STATUS_DISPLAY
from utils.clinic_queries import get_all_active_clinics, get_clinic_by_id_with_active_check
from utils.datetime_utils import malaysia_now, parse_datetime_to_malaysia

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_active_clinic_or_404(db: Session, clinic_id: int) -> Clinic:
    try:
        return get_clinic_by_id_with_active_check(db, clinic_id)
    except ValueError:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail="Clinic not found"
        )


@router.get("", summary="List active clinics with live status")
async def list_clinics(db: Session = Depends(get_db)) -> ClinicListResponse:
    """
    List active clinics with their current open/closed status.

    Uses the status monitor's snapshot when it has one; clinics missing
    from the snapshot (e.g. added since the last refresh) are evaluated
    on the spot.
    """
    try:
        snapshot = get_clinic_status_monitor().snapshot
        evaluated_at = snapshot.evaluated_at if snapshot else malaysia_now()

        items = []
        for clinic in get_all_active_clinics(db):
            status: Optional[ClinicStatus] = snapshot.statuses.get(clinic.id) if snapshot else None
            if status is None:
                status = OpeningHoursService.get_status_for_clinic(db, clinic, evaluated_at)
            label, color = STATUS_DISPLAY[status]
            items.append(ClinicListItemResponse(
                id=clinic.id,
                name=clinic.name,
                slug=clinic.slug,
                address=clinic.address,
                phone=clinic.phone,
                status=status,
                label=label,
                color=color,
            ))

        return ClinicListResponse(clinics=items, evaluated_at=evaluated_at)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Failed to list clinics: {e}")
        raise HTTPException(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to list clinics"
        )


@router.get("/{clinic_id}/status", summary="Get a clinic's live status")
async def get_clinic_status(
    clinic_id: int,
    at: Optional[str] = Query(None, description="ISO datetime to evaluate at (defaults to now, Malaysia time)"),
    db: Session = Depends(get_db)
) -> ClinicStatusResponse:
    """Status badge, open flag and next opening time for a clinic."""
    clinic = _get_active_clinic_or_404(db, clinic_id)

    try:
        evaluated_at: datetime = parse_datetime_to_malaysia(at) if at else malaysia_now()
    except ValueError as e:
        raise HTTPException(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    weekly, overrides = OpeningHoursService.load_opening_hours(db, clinic.id)

    if clinic.is_permanently_closed:
        status, is_open, next_opening = ClinicStatus.CLOSED, False, None
    else:
        status = evaluate_clinic_status(weekly, overrides, evaluated_at)
        is_open = is_clinic_open(weekly, overrides, evaluated_at)
        next_opening = get_next_opening_time(weekly, overrides, evaluated_at)

    return ClinicStatusResponse.build(
        clinic_id=clinic.id,
        status=status,
        is_open=is_open,
        next_opening_time=next_opening,
        evaluated_at=evaluated_at,
    )


@router.get("/{clinic_id}/hours", summary="Get a clinic's opening hours")
async def get_clinic_hours(
    clinic_id: int,
    db: Session = Depends(get_db)
) -> ClinicHoursResponse:
    """Weekly hours and date overrides for a clinic."""
    clinic = _get_active_clinic_or_404(db, clinic_id)
    weekly, overrides = OpeningHoursService.load_opening_hours(db, clinic.id)

    return ClinicHoursResponse(
        clinic_id=clinic.id,
        hours=[WeeklyHoursResponse.from_weekly_hours(h) for h in weekly],
        special_hours=[SpecialHoursResponse.from_override(o) for o in overrides],
    )
