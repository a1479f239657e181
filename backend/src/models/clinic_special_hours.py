"""
Clinic special hours model for date-specific overrides.

Public holidays, festive closures and one-off extended hours are stored
here. An override replaces the weekly schedule for its whole date.
"""

from datetime import date as date_type, time, datetime
from typing import Optional
from sqlalchemy import Date, Time, TIMESTAMP, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base


class ClinicSpecialHours(Base):
    """
    Calendar-date exception to a clinic's weekly hours.

    At most one override per clinic and date.
    """

    __tablename__ = "clinic_special_hours"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    clinic_id: Mapped[int] = mapped_column(ForeignKey("clinics.id", ondelete="CASCADE"))

    date: Mapped[date_type] = mapped_column(Date)
    """Calendar date (Malaysia local date) the override applies to."""

    is_closed: Mapped[bool] = mapped_column(Boolean, default=False)
    """Closed for the whole day. When true, open_time/close_time are null."""

    open_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)

    close_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)

    created_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    updated_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    clinic = relationship("Clinic", back_populates="special_hours")

    __table_args__ = (
        UniqueConstraint('clinic_id', 'date', name='uq_clinic_special_hours_clinic_date'),
    )

    def __repr__(self) -> str:
        if self.is_closed:
            return f"<ClinicSpecialHours(clinic_id={self.clinic_id}, date={self.date}, closed)>"
        return f"<ClinicSpecialHours(clinic_id={self.clinic_id}, date={self.date}, {self.open_time}-{self.close_time})>"
