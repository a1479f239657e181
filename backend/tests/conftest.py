"""
Test configuration and shared fixtures for the dental directory test suite.

Runs against an in-memory SQLite database by default; point
TEST_DATABASE_URL at a PostgreSQL database to run the same suite there.
Each test gets freshly created tables.
"""

import os

# Must be set before any application module reads core.config
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")
os.environ.setdefault("DATABASE_URL", TEST_DATABASE_URL)
os.environ.setdefault("STATUS_MONITOR_ENABLED", "false")

import pytest
from typing import Generator, Optional, Sequence, Tuple

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool, StaticPool

from core.database import Base
from models.clinic import Clinic
from models.clinic_hours import ClinicHours
from models.clinic_special_hours import ClinicSpecialHours
from utils.datetime_utils import parse_date_string, parse_time_string


@pytest.fixture(scope="session")
def db_engine():
    """
    Create a database engine for the test session.

    SQLite in-memory databases live only as long as their connection, so
    StaticPool keeps a single shared connection for the whole session.
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_engine(TEST_DATABASE_URL, poolclass=NullPool)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine) -> Generator[Session, None, None]:
    """Provide a session on freshly created tables; tables are dropped afterwards."""
    Base.metadata.create_all(bind=db_engine)
    TestingSession = sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()

    yield session

    session.close()
    Base.metadata.drop_all(bind=db_engine)


def create_clinic_with_hours(
    db_session: Session,
    name: str = "Klinik Pergigian Test",
    slug: str = "klinik-pergigian-test",
    hours: Sequence[Tuple[int, Optional[str], Optional[str]]] = (),
    special_hours: Sequence[Tuple[str, bool, Optional[str], Optional[str]]] = (),
    is_active: bool = True,
    is_permanently_closed: bool = False,
) -> Clinic:
    """
    Create a clinic with weekly hours and date overrides.

    Args:
        hours: (day_of_week, open_time, close_time) tuples, times as "HH:MM"
        special_hours: (date, is_closed, open_time, close_time) tuples,
            dates as "YYYY-MM-DD"
    """
    clinic = Clinic(
        name=name,
        slug=slug,
        address="1 Jalan Test, Kuala Lumpur",
        phone="+60312345678",
        is_active=is_active,
        is_permanently_closed=is_permanently_closed,
    )
    db_session.add(clinic)
    db_session.flush()

    for day_of_week, open_time, close_time in hours:
        db_session.add(ClinicHours(
            clinic_id=clinic.id,
            day_of_week=day_of_week,
            open_time=parse_time_string(open_time) if open_time else None,
            close_time=parse_time_string(close_time) if close_time else None,
        ))

    for day, is_closed, open_time, close_time in special_hours:
        db_session.add(ClinicSpecialHours(
            clinic_id=clinic.id,
            date=parse_date_string(day),
            is_closed=is_closed,
            open_time=parse_time_string(open_time) if open_time else None,
            close_time=parse_time_string(close_time) if close_time else None,
        ))

    db_session.commit()
    return clinic


@pytest.fixture
def sample_clinic(db_session) -> Clinic:
    """Clinic open Monday-Friday 09:00-17:00 with split Saturday shifts and a holiday closure."""
    weekdays = [(day, "09:00", "17:00") for day in range(5)]
    saturday = [(5, "09:00", "12:00"), (5, "14:00", "18:00")]
    return create_clinic_with_hours(
        db_session,
        hours=weekdays + saturday,
        special_hours=[("2025-01-29", True, None, None)],  # Chinese New Year
    )
