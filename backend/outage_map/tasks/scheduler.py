"""APScheduler setup for the periodic PSE outage fetch."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from outage_map.config import settings
from outage_map.services.outage_poller import OutagePoller

logger = logging.getLogger(__name__)

_scheduler: AsyncIOScheduler | None = None


def start_scheduler(poller: OutagePoller):
    global _scheduler
    _scheduler = AsyncIOScheduler()

    # tick() never raises, so a failed fetch doesn't stop the job
    _scheduler.add_job(
        poller.tick,
        "interval",
        minutes=settings.fetch_interval_minutes,
        id="outage_fetch",
        name="PSE outage fetch",
        max_instances=1,
        coalesce=True,
    )

    _scheduler.start()
    logger.info("Scheduler started: outages every %d min", settings.fetch_interval_minutes)


def stop_scheduler():
    global _scheduler
    if _scheduler:
        _scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
        _scheduler = None
