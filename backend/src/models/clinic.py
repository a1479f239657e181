"""
Clinic model representing a dental clinic listed in the directory.

A clinic owns its recurring weekly opening hours and its date-specific
special hours, which together drive the live open/closed badge on
listing pages.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import String, TIMESTAMP, Text, Boolean
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base
from core.constants import MAX_STRING_LENGTH


class Clinic(Base):
    """
    Dental clinic entity.

    Only the fields the opening-hours backend needs are mapped here; the
    rest of the listing profile (images, services, doctors, reviews) lives
    with the directory site.
    """

    __tablename__ = "clinics"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    """Unique identifier for the clinic."""

    name: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH))
    """Display name of the clinic."""

    slug: Mapped[str] = mapped_column(String(MAX_STRING_LENGTH), unique=True, index=True)
    """URL slug used by the listing page (/place/{slug})."""

    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    """
    Whether the clinic is published in the directory.

    Inactive clinics are hidden from listings and never reported as open.
    """

    is_permanently_closed: Mapped[bool] = mapped_column(Boolean, default=False)
    """Clinic has shut down for good; always reported as closed."""

    created_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    """Timestamp when the clinic was first created."""

    updated_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    """Timestamp when the clinic was last updated."""

    # Relationships
    hours = relationship(
        "ClinicHours",
        back_populates="clinic",
        cascade="all, delete-orphan",
    )
    """Recurring weekly opening shifts."""

    special_hours = relationship(
        "ClinicSpecialHours",
        back_populates="clinic",
        cascade="all, delete-orphan",
    )
    """Date-specific overrides (public holidays, special opening hours)."""

    def __repr__(self) -> str:
        return f"<Clinic(id={self.id}, slug='{self.slug}')>"
