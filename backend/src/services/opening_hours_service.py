"""
Opening hours service for loading and editing clinic hours.

This service handles:
- Loading weekly hours and date overrides for a clinic
- Converting rows into validated WeeklyHours / DateOverride snapshots
- Replacing a clinic's weekly schedule in one transaction
- Upserting and deleting date overrides
- Computing a clinic's live status from the database
"""

import logging
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from sqlalchemy.orm import Session

from models import Clinic, ClinicHours, ClinicSpecialHours
from services.clinic_status_service import evaluate_clinic_status
from shared_types.opening_hours import (
    ClinicStatus,
    DateOverride,
    OpeningHoursValidationError,
    WeeklyHours,
)
from utils.clinic_queries import get_clinic_by_id_with_active_check
from utils.datetime_utils import minutes_of_day, parse_time_string

logger = logging.getLogger(__name__)


def _validate_window(label: str, open_time: Optional[str], close_time: Optional[str]) -> None:
    if (open_time is None) != (close_time is None):
        raise OpeningHoursValidationError(f"{label}: open_time and close_time must be provided together")
    if open_time is not None and close_time is not None \
            and minutes_of_day(open_time) >= minutes_of_day(close_time):
        raise OpeningHoursValidationError(
            f"{label}: open_time {open_time} must be earlier than close_time {close_time}"
        )


class OpeningHoursService:
    """Service for clinic weekly hours, date overrides and live status."""

    @staticmethod
    def get_clinic_hours(db: Session, clinic_id: int) -> List[ClinicHours]:
        """Weekly hours for a clinic, ordered by day, then opening time."""
        return db.query(ClinicHours).filter(
            ClinicHours.clinic_id == clinic_id
        ).order_by(
            ClinicHours.day_of_week, ClinicHours.open_time, ClinicHours.id
        ).all()

    @staticmethod
    def get_clinic_special_hours(db: Session, clinic_id: int) -> List[ClinicSpecialHours]:
        """Date overrides for a clinic, ordered by date."""
        return db.query(ClinicSpecialHours).filter(
            ClinicSpecialHours.clinic_id == clinic_id
        ).order_by(
            ClinicSpecialHours.date, ClinicSpecialHours.id
        ).all()

    @staticmethod
    def load_opening_hours(db: Session, clinic_id: int) -> Tuple[List[WeeklyHours], List[DateOverride]]:
        """
        Load a clinic's hours as evaluator inputs.

        Raises:
            OpeningHoursValidationError: If a stored row is malformed
        """
        weekly = [WeeklyHours.from_model(row) for row in OpeningHoursService.get_clinic_hours(db, clinic_id)]
        overrides = [
            DateOverride.from_model(row) for row in OpeningHoursService.get_clinic_special_hours(db, clinic_id)
        ]
        return weekly, overrides

    @staticmethod
    def replace_weekly_hours(
        db: Session,
        clinic_id: int,
        entries: Sequence[WeeklyHours],
    ) -> List[ClinicHours]:
        """
        Replace the whole weekly schedule of a clinic.

        Existing rows are deleted and the new ones inserted in the same
        transaction, so readers never see a half-written week.

        Args:
            db: Database session
            clinic_id: Clinic ID
            entries: New shifts. Each needs both times (open before close) or
                neither (day listed as closed).

        Raises:
            ValueError: If the clinic does not exist
            OpeningHoursValidationError: If an entry is invalid
        """
        get_clinic_by_id_with_active_check(db, clinic_id, require_active=False)

        for entry in entries:
            _validate_window(f"day {entry.day_of_week}", entry.open_time, entry.close_time)

        try:
            db.query(ClinicHours).filter(ClinicHours.clinic_id == clinic_id).delete(synchronize_session=False)
            rows = [
                ClinicHours(
                    clinic_id=clinic_id,
                    day_of_week=entry.day_of_week,
                    open_time=parse_time_string(entry.open_time) if entry.open_time else None,
                    close_time=parse_time_string(entry.close_time) if entry.close_time else None,
                )
                for entry in entries
            ]
            db.add_all(rows)
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Replaced weekly hours for clinic {clinic_id} ({len(rows)} shift(s))")
        return OpeningHoursService.get_clinic_hours(db, clinic_id)

    @staticmethod
    def upsert_special_hours(
        db: Session,
        clinic_id: int,
        override: DateOverride,
    ) -> ClinicSpecialHours:
        """
        Create or update the override for ``override.date``.

        A closed override never stores times; an open one needs both, with
        the opening before the closing.

        Raises:
            ValueError: If the clinic does not exist
            OpeningHoursValidationError: If the override is invalid
        """
        get_clinic_by_id_with_active_check(db, clinic_id, require_active=False)

        if override.is_closed:
            open_time, close_time = None, None
        else:
            if not override.has_times:
                raise OpeningHoursValidationError(
                    f"{override.date.isoformat()}: open_time and close_time are required unless is_closed"
                )
            _validate_window(override.date.isoformat(), override.open_time, override.close_time)
            assert override.open_time is not None and override.close_time is not None
            open_time, close_time = parse_time_string(override.open_time), parse_time_string(override.close_time)

        row = db.query(ClinicSpecialHours).filter(
            ClinicSpecialHours.clinic_id == clinic_id,
            ClinicSpecialHours.date == override.date,
        ).first()
        if row is None:
            row = ClinicSpecialHours(clinic_id=clinic_id, date=override.date)
            db.add(row)

        row.is_closed = override.is_closed
        row.open_time = open_time
        row.close_time = close_time

        try:
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(f"Saved special hours for clinic {clinic_id} on {override.date.isoformat()}")
        return row

    @staticmethod
    def delete_special_hours(db: Session, clinic_id: int, day: date) -> bool:
        """
        Delete the override for a date.

        Returns:
            True if an override was deleted, False if none existed
        """
        row = db.query(ClinicSpecialHours).filter(
            ClinicSpecialHours.clinic_id == clinic_id,
            ClinicSpecialHours.date == day,
        ).first()
        if row is None:
            return False

        db.delete(row)
        try:
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"Deleted special hours for clinic {clinic_id} on {day.isoformat()}")
        return True

    @staticmethod
    def get_status_for_clinic(db: Session, clinic: Clinic, now: Optional[datetime] = None) -> ClinicStatus:
        """Live status of an already-loaded clinic."""
        if clinic.is_permanently_closed or not clinic.is_active:
            return ClinicStatus.CLOSED
        weekly, overrides = OpeningHoursService.load_opening_hours(db, clinic.id)
        return evaluate_clinic_status(weekly, overrides, now)

    @staticmethod
    def get_clinic_status(db: Session, clinic_id: int, now: Optional[datetime] = None) -> ClinicStatus:
        """
        Live status of a clinic.

        Raises:
            ValueError: If the clinic does not exist
        """
        clinic = get_clinic_by_id_with_active_check(db, clinic_id, require_active=False)
        return OpeningHoursService.get_status_for_clinic(db, clinic, now)
