"""
APScheduler-based timer for delivery sweeps.

One interval job runs the sweep: immediately at startup, then every
SWEEP_INTERVAL_MINUTES. The job is limited to a single running instance, so
a tick that fires while the previous sweep is still going is skipped rather
than starting a second, overlapping sweep.

No job store is persisted: the schedule that matters (each user's
next_due_at) lives in the users table.
"""

import logging
from datetime import datetime, timedelta, timezone

import sentry_sdk
from apscheduler.schedulers.asyncio import AsyncIOScheduler

from core.catalog import Catalog
from core.notifications.providers import NotificationService
from core.notifications.sweep import run_sweep

logger = logging.getLogger(__name__)


SWEEP_JOB_ID = "sweep"

_scheduler: AsyncIOScheduler | None = None


# =============================================================================
# Scheduler initialization and shutdown
# =============================================================================


def init_scheduler(
    notifications: NotificationService,
    catalog: Catalog,
    interval_minutes: int,
) -> AsyncIOScheduler:
    """
    Initialize and start the APScheduler with the sweep job.

    Call this during app startup (in FastAPI lifespan), from inside the
    running event loop.
    """
    global _scheduler

    if _scheduler is not None:
        return _scheduler

    _scheduler = AsyncIOScheduler(
        job_defaults={
            "coalesce": True,  # Combine missed runs into one
            "max_instances": 1,
            "misfire_grace_time": 60 * interval_minutes,
        },
    )
    _scheduler.add_job(
        _execute_sweep,
        trigger="interval",
        minutes=interval_minutes,
        next_run_time=datetime.now(timezone.utc),  # First sweep right away
        id=SWEEP_JOB_ID,
        replace_existing=True,
        kwargs={"notifications": notifications, "catalog": catalog},
    )
    _scheduler.start()
    logger.info(f"Sweep scheduler started, interval {interval_minutes} minutes")

    return _scheduler


def shutdown_scheduler() -> None:
    """
    Stop the scheduler. An in-flight sweep is abandoned; users it did not
    reach are still due and get picked up on the next start.
    """
    global _scheduler
    if _scheduler:
        _scheduler.shutdown(wait=False)
        _scheduler = None
        logger.info("Sweep scheduler stopped")


def get_next_sweep_time() -> datetime | None:
    """When the next sweep is scheduled, or None if the scheduler isn't running."""
    if not _scheduler:
        return None
    job = _scheduler.get_job(SWEEP_JOB_ID)
    return job.next_run_time if job else None


def get_sweep_interval() -> timedelta | None:
    if not _scheduler:
        return None
    job = _scheduler.get_job(SWEEP_JOB_ID)
    return job.trigger.interval if job else None


# =============================================================================
# Job execution
# =============================================================================


async def _execute_sweep(notifications: NotificationService, catalog: Catalog) -> None:
    """
    Run one sweep. This is the job function called by APScheduler.

    Never raises, so a broken sweep never stops the timer.
    """
    logger.info("Running sweep...")
    try:
        sent_count = await run_sweep(notifications, catalog)
        logger.info(f"Sweep finished, sent {sent_count} notifications")
    except Exception as e:
        logger.exception(f"Sweep failed: {e}")
        sentry_sdk.capture_exception(e)
