# pyright: reportMissingTypeStubs=false
"""
Database configuration and session management.

Sets up the SQLAlchemy engine and session factory for the directory
database and provides session helpers for FastAPI routes and for
background jobs such as the clinic status monitor.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Generator

from fastapi import HTTPException
from sqlalchemy import create_engine, event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from core.config import DATABASE_URL
from core.constants import DB_POOL_RECYCLE_SECONDS

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> Dict[str, Any]:
    """Engine keyword arguments for the configured backend."""
    options: Dict[str, Any] = {
        "pool_pre_ping": True,  # Verify connections before use
        "echo": False,
        "future": True,
    }
    if url.startswith("sqlite"):
        # Local development / tests: SQLite connections are used across threads by TestClient
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_recycle"] = DB_POOL_RECYCLE_SECONDS
    return options


engine = create_engine(DATABASE_URL, **_engine_options(DATABASE_URL))

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,  # Keep loaded rows usable after commit
)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def _set_if_mapped(mapper: Any, target: Any, column: str, value: Any, only_if_empty: bool) -> None:
    if not hasattr(mapper, "columns") or column not in mapper.columns:
        return
    if only_if_empty and getattr(target, column, None) is not None:
        return
    setattr(target, column, value)


# Timestamps are written in Malaysia time so rows line up with clinic wall-clock hours
@event.listens_for(Base, "before_insert", propagate=True)  # type: ignore
def receive_before_insert(mapper, connection, target):  # type: ignore
    """Set created_at and updated_at on insert."""
    # Import here to avoid circular import
    from utils.datetime_utils import malaysia_now
    now = malaysia_now()
    _set_if_mapped(mapper, target, "created_at", now, only_if_empty=True)
    _set_if_mapped(mapper, target, "updated_at", now, only_if_empty=True)


@event.listens_for(Base, "before_update", propagate=True)  # type: ignore
def receive_before_update(mapper, connection, target):  # type: ignore
    """Refresh updated_at on update."""
    from utils.datetime_utils import malaysia_now
    _set_if_mapped(mapper, target, "updated_at", malaysia_now(), only_if_empty=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency to provide database sessions.

    Yields a session that is closed after the request, rolling back
    if the request handler raised.

    Example:
        ```python
        @router.get("/clinics")
        def list_clinics(db: Session = Depends(get_db)):
            return db.query(Clinic).all()
        ```
    """
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.exception(f"Database error: {e}")
        db.rollback()
        raise
    except HTTPException:
        # Expected request errors (404, 403, ...), not worth an error log
        db.rollback()
        raise
    except Exception as e:
        logger.exception(f"Unexpected error in database session: {e}")
        db.rollback()
        raise
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of request handling.

    Commits on success and rolls back on error. Used by the clinic status
    monitor, which needs a fresh session for every scheduled run.

    Example:
        ```python
        with get_db_context() as db:
            clinics = get_all_active_clinics(db)
        ```
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.exception(f"Database transaction failed: {e}")
        raise
    finally:
        db.close()


def create_tables() -> None:
    """
    Create all tables defined on Base.

    Production schemas are managed with Alembic; this is for local setup
    and tests.
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database tables created successfully")
    except SQLAlchemyError as e:
        logger.exception(f"Failed to create database tables: {e}")
        raise


def drop_tables() -> None:
    """
    Drop all tables defined on Base.

    WARNING: permanently deletes all directory data. Development only.
    """
    try:
        Base.metadata.drop_all(bind=engine)
        logger.info("Database tables dropped successfully")
    except SQLAlchemyError as e:
        logger.exception(f"Failed to drop database tables: {e}")
        raise
