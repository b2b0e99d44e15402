"""Tests for the cache maintenance job."""

import asyncio
from datetime import timedelta
from unittest.mock import patch

import pytest
from gold_api.config import CACHE_CLEANUP_INTERVAL
from gold_api.services.cache import CacheService
from gold_api.tasks.scheduler import purge_expired_cache, scheduler, start_scheduler, stop_scheduler


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.mark.asyncio
async def test_purge_removes_expired_entries():
    clock = FakeClock()
    cache = CacheService(max_size=10, clock=clock)
    cache.set("old", 1, ttl=60)
    cache.set("fresh", 2, ttl=3600)
    clock.now += 120

    with patch("gold_api.tasks.scheduler.gold_cache", cache):
        await purge_expired_cache()

    assert len(cache) == 1
    assert cache.get("fresh") == 2


@pytest.mark.asyncio
async def test_purge_logs_count(caplog):
    clock = FakeClock()
    cache = CacheService(max_size=10, clock=clock)
    cache.set("a", 1, ttl=1)
    cache.set("b", 2, ttl=1)
    clock.now += 5

    with patch("gold_api.tasks.scheduler.gold_cache", cache), caplog.at_level("INFO"):
        await purge_expired_cache()

    assert "removed 2 expired entries" in caplog.text


@pytest.mark.asyncio
async def test_purge_failure_is_logged_not_raised(caplog):
    with patch(
        "gold_api.tasks.scheduler.gold_cache.purge_expired",
        side_effect=RuntimeError("boom"),
    ):
        await purge_expired_cache()
    assert "Cache cleanup failed: boom" in caplog.text


@pytest.mark.asyncio
async def test_start_and_stop_scheduler():
    start_scheduler()
    try:
        job = scheduler.get_job("purge_expired_cache")
        assert job is not None
        assert job.trigger.interval == timedelta(seconds=CACHE_CLEANUP_INTERVAL)
        assert scheduler.running
    finally:
        await stop_scheduler()
    assert not scheduler.running


@pytest.mark.asyncio
async def test_stop_when_not_running_is_a_no_op(caplog):
    caplog.set_level("INFO")
    assert not scheduler.running
    await stop_scheduler()
    await asyncio.sleep(0)
    assert not scheduler.running
    assert "Scheduler stopped" not in caplog.text
