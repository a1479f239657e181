# pyright: reportMissingTypeStubs=false
"""
Admin endpoints for editing clinic opening hours.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi import status as http_status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from api.responses import ClinicHoursResponse, SpecialHoursResponse, WeeklyHoursResponse
from auth.dependencies import AdminContext, require_admin
from core.database import get_db
from services.opening_hours_service import OpeningHoursService
from shared_types.opening_hours import DateOverride, WeeklyHours
from utils.clinic_queries import get_clinic_by_id_with_active_check
from utils.datetime_utils import parse_date_string

logger = logging.getLogger(__name__)

router = APIRouter()


# ===== Request Models =====

class WeeklyHoursRequest(BaseModel):
    """Request model for one weekly shift."""
    day_of_week: int = Field(..., ge=0, le=6, description="0=Monday, 6=Sunday")
    open_time: Optional[str] = Field(None, description="HH:MM, 24-hour")
    close_time: Optional[str] = Field(None, description="HH:MM, 24-hour")


class WeeklyHoursReplaceRequest(BaseModel):
    """Request model for replacing a clinic's weekly schedule."""
    hours: List[WeeklyHoursRequest]


class SpecialHoursRequest(BaseModel):
    """Request model for a date override."""
    is_closed: bool = False
    open_time: Optional[str] = None
    close_time: Optional[str] = None


# ===== Helpers =====

def _ensure_clinic_exists(db: Session, clinic_id: int) -> None:
    try:
        get_clinic_by_id_with_active_check(db, clinic_id, require_active=False)
    except ValueError:
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail="Clinic not found"
        )


def _parse_override_date(override_date: str):
    try:
        return parse_date_string(override_date)
    except ValueError as e:
        raise HTTPException(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


# ===== API Endpoints =====

@router.put("/{clinic_id}/hours", summary="Replace a clinic's weekly hours")
async def replace_clinic_hours(
    clinic_id: int,
    request: WeeklyHoursReplaceRequest,
    admin: AdminContext = Depends(require_admin),
    db: Session = Depends(get_db)
) -> ClinicHoursResponse:
    """Replace the full weekly schedule. Validation errors return 400."""
    _ensure_clinic_exists(db, clinic_id)

    try:
        entries = [
            WeeklyHours(day_of_week=h.day_of_week, open_time=h.open_time, close_time=h.close_time)
            for h in request.hours
        ]
        OpeningHoursService.replace_weekly_hours(db, clinic_id, entries)
    except ValueError as e:
        raise HTTPException(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    logger.info(f"{admin.email} replaced weekly hours for clinic {clinic_id}")
    weekly, overrides = OpeningHoursService.load_opening_hours(db, clinic_id)
    return ClinicHoursResponse(
        clinic_id=clinic_id,
        hours=[WeeklyHoursResponse.from_weekly_hours(h) for h in weekly],
        special_hours=[SpecialHoursResponse.from_override(o) for o in overrides],
    )


@router.put("/{clinic_id}/special-hours/{override_date}", summary="Create or update a date override")
async def upsert_special_hours(
    clinic_id: int,
    override_date: str,
    request: SpecialHoursRequest,
    admin: AdminContext = Depends(require_admin),
    db: Session = Depends(get_db)
) -> SpecialHoursResponse:
    """Set special hours (or a full-day closure) for one date."""
    _ensure_clinic_exists(db, clinic_id)
    day = _parse_override_date(override_date)

    try:
        override = DateOverride(
            date=day,
            is_closed=request.is_closed,
            open_time=request.open_time,
            close_time=request.close_time,
        )
        row = OpeningHoursService.upsert_special_hours(db, clinic_id, override)
    except ValueError as e:
        raise HTTPException(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    logger.info(f"{admin.email} set special hours for clinic {clinic_id} on {day.isoformat()}")
    return SpecialHoursResponse.from_override(DateOverride.from_model(row))


@router.delete(
    "/{clinic_id}/special-hours/{override_date}",
    summary="Delete a date override",
    status_code=http_status.HTTP_204_NO_CONTENT,
)
async def delete_special_hours(
    clinic_id: int,
    override_date: str,
    admin: AdminContext = Depends(require_admin),
    db: Session = Depends(get_db)
) -> None:
    """Remove the override for a date; 404 if there is none."""
    _ensure_clinic_exists(db, clinic_id)
    day = _parse_override_date(override_date)

    if not OpeningHoursService.delete_special_hours(db, clinic_id, day):
        raise HTTPException(
            status_code=http_status.HTTP_404_NOT_FOUND,
            detail="No special hours for this date"
        )

    logger.info(f"{admin.email} deleted special hours for clinic {clinic_id} on {day.isoformat()}")
