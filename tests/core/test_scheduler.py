"""
Unit tests for the background job scheduler wrapper.
"""

from unittest.mock import AsyncMock

import pytest
from apscheduler.triggers.interval import IntervalTrigger

from roster.core import scheduler


@pytest.fixture(autouse=True)
def _clean_registry():
    scheduler._job_registry.clear()
    yield
    scheduler._job_registry.clear()


class TestScheduler:
    """Tests for registration and start/stop."""

    @pytest.mark.asyncio
    async def test_jobs_registered_before_start_are_scheduled(self):
        scheduler.register_job("demo_job", AsyncMock(), IntervalTrigger(hours=24))

        started = await scheduler.start_scheduler()
        try:
            assert started.get_job("demo_job") is not None
            jobs = scheduler.list_registered_jobs()
            assert jobs[0]["job_id"] == "demo_job"
            assert jobs[0]["next_run_time"] is not None
        finally:
            await scheduler.stop_scheduler()

        assert scheduler.get_scheduler() is None

    @pytest.mark.asyncio
    async def test_stop_without_start_is_a_no_op(self):
        await scheduler.stop_scheduler()
        assert scheduler.get_scheduler() is None

    def test_list_without_scheduler_has_no_run_time(self):
        scheduler.register_job("idle_job", AsyncMock(), IntervalTrigger(hours=1))

        assert scheduler.list_registered_jobs() == [{"job_id": "idle_job", "next_run_time": None}]
