"""
Live clinic status monitor.

Keeps an in-memory snapshot of every active clinic's open/closed status,
re-evaluated on a fixed interval by APScheduler. Listing endpoints read the
snapshot instead of evaluating every clinic on every request.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore
from apscheduler.triggers.interval import IntervalTrigger  # type: ignore
from sqlalchemy.exc import SQLAlchemyError

from core.config import STATUS_REFRESH_INTERVAL_SECONDS
from core.constants import STATUS_MONITOR_MAX_INSTANCES
from core.database import get_db_context
from services.opening_hours_service import OpeningHoursService
from shared_types.opening_hours import ClinicStatus
from utils.clinic_queries import get_all_active_clinics
from utils.datetime_utils import malaysia_now, MALAYSIA_TZ

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StatusSnapshot:
    """Statuses of all active clinics as of ``evaluated_at``."""
    evaluated_at: datetime
    statuses: Dict[int, ClinicStatus] = field(default_factory=dict)


class ClinicStatusMonitor:
    """
    Periodically re-evaluates the status of every active clinic.

    The snapshot is replaced as a whole after each run, so readers always
    see one consistent run.
    """

    def __init__(self, interval_seconds: int = STATUS_REFRESH_INTERVAL_SECONDS):
        """
        Initialize the monitor.

        Note: Database sessions are created fresh for each refresh run.
        """
        self.interval_seconds = interval_seconds
        self.scheduler = AsyncIOScheduler(timezone=MALAYSIA_TZ)
        self._is_started = False
        self._snapshot: Optional[StatusSnapshot] = None

    @property
    def is_running(self) -> bool:
        return self._is_started

    @property
    def snapshot(self) -> Optional[StatusSnapshot]:
        """Latest snapshot, or None before the first successful run."""
        return self._snapshot

    def get_status(self, clinic_id: int) -> Optional[ClinicStatus]:
        """Cached status of a clinic, or None if it is not in the snapshot."""
        snapshot = self._snapshot
        if snapshot is None:
            return None
        return snapshot.statuses.get(clinic_id)

    async def start(self) -> None:
        """
        Start the refresh job.

        Runs one refresh immediately so the snapshot is populated before
        the first interval elapses.
        """
        if self._is_started:
            logger.warning("Clinic status monitor is already started")
            return

        self.scheduler.add_job(  # type: ignore
            self.refresh,
            IntervalTrigger(seconds=self.interval_seconds),
            id="refresh_clinic_statuses",
            name="Refresh clinic open/closed statuses",
            max_instances=STATUS_MONITOR_MAX_INSTANCES,
            replace_existing=True
        )

        self.scheduler.start()
        self._is_started = True
        logger.info(f"Clinic status monitor started (every {self.interval_seconds}s)")

        await self.refresh()

    async def stop(self) -> None:
        """Stop the refresh job. The last snapshot stays readable."""
        if self._is_started:
            self.scheduler.shutdown(wait=False)
            self._is_started = False
            logger.info("Clinic status monitor stopped")

    async def refresh(self, now: Optional[datetime] = None) -> Optional[StatusSnapshot]:
        """
        Re-evaluate all active clinics and swap in a new snapshot.

        A clinic whose hours fail to load is logged and left out of the
        snapshot. If the run itself fails, the previous snapshot is kept.

        Note: The database sweep runs in a worker thread so it does not
        block the event loop serving API requests.

        Returns:
            The new snapshot, or None if the run failed
        """
        evaluated_at = now or malaysia_now()

        try:
            statuses = await asyncio.to_thread(self._build_statuses, evaluated_at)
        except Exception as e:
            logger.exception(f"Error refreshing clinic statuses: {e}")
            return None

        snapshot = StatusSnapshot(evaluated_at=evaluated_at, statuses=statuses)
        self._snapshot = snapshot
        logger.debug(f"Refreshed statuses for {len(statuses)} clinic(s)")
        return snapshot

    def _build_statuses(self, evaluated_at: datetime) -> Dict[int, ClinicStatus]:
        """
        Evaluate every active clinic (synchronous/blocking database work).

        Uses a fresh database session for each run.
        """
        statuses: Dict[int, ClinicStatus] = {}
        with get_db_context() as db:
            for clinic in get_all_active_clinics(db):
                try:
                    statuses[clinic.id] = OpeningHoursService.get_status_for_clinic(db, clinic, evaluated_at)
                except ValueError as e:
                    logger.warning(f"Skipping clinic {clinic.id} in status refresh: {e}")
                except SQLAlchemyError as e:
                    # Reset the failed transaction so the remaining clinics can still be read
                    db.rollback()
                    logger.warning(f"Skipping clinic {clinic.id} in status refresh after database error: {e}")
        return statuses


# Global monitor instance
_clinic_status_monitor: Optional[ClinicStatusMonitor] = None


def get_clinic_status_monitor() -> ClinicStatusMonitor:
    """Get the global clinic status monitor instance."""
    global _clinic_status_monitor
    if _clinic_status_monitor is None:
        _clinic_status_monitor = ClinicStatusMonitor()
    return _clinic_status_monitor


async def start_clinic_status_monitor() -> None:
    """
    Start the global clinic status monitor.

    This should be called during application startup.
    """
    await get_clinic_status_monitor().start()


async def stop_clinic_status_monitor() -> None:
    """
    Stop the global clinic status monitor.

    This should be called during application shutdown.
    """
    if _clinic_status_monitor:
        await _clinic_status_monitor.stop()
