"""Background scheduler for periodic cache maintenance."""

import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from gold_api.config import CACHE_CLEANUP_INTERVAL
from gold_api.services.cache import gold_cache

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def purge_expired_cache():
    """Drop expired cache entries so memory stays bounded between reads."""
    try:
        removed = gold_cache.purge_expired()
        if removed:
            logger.info(f"Cache cleanup: removed {removed} expired entries")
    except Exception as e:
        logger.error(f"Cache cleanup failed: {e}")


def start_scheduler():
    """Start the background scheduler."""
    scheduler.add_job(
        purge_expired_cache,
        trigger=IntervalTrigger(seconds=CACHE_CLEANUP_INTERVAL),
        id="purge_expired_cache",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Scheduler started, sweeping cache every {CACHE_CLEANUP_INTERVAL}s")


async def stop_scheduler():
    """Stop the background scheduler. Does nothing if it is not running."""
    if scheduler.running:
        scheduler.shutdown()
        # Newer AsyncIOScheduler releases queue the shutdown on the loop
        await asyncio.sleep(0)
        logger.info("Scheduler stopped")
