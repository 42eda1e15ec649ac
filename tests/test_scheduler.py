"""
Unit Tests for the background scheduler
"""

import asyncio

import pytest

from core.scheduler import Scheduler


class TestScheduler:
    def test_register(self):
        async def job():
            return None

        scheduler = Scheduler()
        scheduler.register("refresh", job, 30)

        assert [(item.name, item.interval_seconds) for item in scheduler.jobs] == [("refresh", 30)]

    @pytest.mark.asyncio
    async def test_start_without_jobs_returns(self):
        await asyncio.wait_for(Scheduler().start(), timeout=1)

    @pytest.mark.asyncio
    async def test_repeats_and_survives_failures(self):
        calls = []

        async def flaky():
            calls.append(len(calls))
            if len(calls) == 1:
                raise RuntimeError("upstream down")

        scheduler = Scheduler()
        scheduler.register("flaky", flaky, 0)
        scheduler.start_background()
        for _ in range(50):
            if len(calls) >= 3:
                break
            await asyncio.sleep(0.01)
        await scheduler.stop()

        assert len(calls) >= 3
        assert scheduler.jobs[0].runs >= 2

    @pytest.mark.asyncio
    async def test_stop_without_start(self):
        await Scheduler().stop()
