"""Scheduler for the daily removal of past shifts."""
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
import logging

from app.config import settings
from app.database import SessionLocal
from app.services.shift_service import ShiftService


# Configure logging
logger = logging.getLogger(__name__)


# Global scheduler instance
scheduler = AsyncIOScheduler(timezone=settings.timezone)


def purge_past_shifts() -> int:
    """
    Delete shifts dated before today.

    This function is called by the scheduler daily. Failures are logged and
    retried on the next run.

    Returns:
        Number of deleted shifts
    """
    logger.info("Starting daily purge of past shifts...")

    db = SessionLocal()
    try:
        deleted = ShiftService(db).purge_past_shifts()
        logger.info(f"Daily purge completed. Deleted {deleted} shifts.")
        return deleted
    except Exception as e:
        logger.error(f"Error during daily purge: {str(e)}", exc_info=True)
        return 0
    finally:
        db.close()


def start_scheduler():
    """
    Start the purge scheduler.

    Configures the scheduler to run the purge daily at ``settings.purge_hour``.
    """
    scheduler.add_job(
        purge_past_shifts,
        trigger=CronTrigger(hour=settings.purge_hour, minute=0),
        id='daily_shift_purge',
        name='Daily Shift Purge',
        replace_existing=True
    )

    logger.info(f"Purge scheduler configured to run daily at {settings.purge_hour}:00")

    scheduler.start()
    logger.info("Purge scheduler started")


def stop_scheduler():
    """
    Stop the purge scheduler.

    This should be called during application shutdown.
    """
    if scheduler.running:
        scheduler.shutdown(wait=True)
        logger.info("Purge scheduler stopped")
    else:
        logger.info("Purge scheduler was not running")
