"""
Clinic hours model for the recurring weekly opening schedule.

Each record is one open shift on one day of the week. Clinics commonly run
split shifts (e.g. 09:00-13:00 and 14:00-18:00), so several records per day
are allowed.
"""

from datetime import time, datetime
from typing import Optional
from sqlalchemy import Time, TIMESTAMP, CheckConstraint, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base


class ClinicHours(Base):
    """
    One recurring weekly opening shift of a clinic.

    No unique constraint on (clinic_id, day_of_week): multiple shifts per
    day are allowed. A row with no times means the day is listed but closed.
    """

    __tablename__ = "clinic_hours"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)

    clinic_id: Mapped[int] = mapped_column(ForeignKey("clinics.id", ondelete="CASCADE"))
    """Reference to the clinic."""

    day_of_week: Mapped[int] = mapped_column()
    """Day of the week (0=Monday, 1=Tuesday, ..., 6=Sunday)."""

    open_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)

    close_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)

    created_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    updated_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP(timezone=True), nullable=True)

    clinic = relationship("Clinic", back_populates="hours")

    __table_args__ = (
        Index('idx_clinic_hours_clinic_day', 'clinic_id', 'day_of_week'),
        CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_clinic_hours_day_of_week'),
    )

    @property
    def day_name(self) -> str:
        """Get the day name for display."""
        days = ['Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday']
        return days[self.day_of_week]

    def __repr__(self) -> str:
        return f"<ClinicHours(clinic_id={self.clinic_id}, day={self.day_name}, {self.open_time}-{self.close_time})>"
