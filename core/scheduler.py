from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ScheduledJob:
    name: str
    interval_seconds: float
    factory: Callable[[], Awaitable[None]]
    runs: int = 0


class Scheduler:
    """Minimal async scheduler that repeatedly runs registered coroutines."""

    def __init__(self) -> None:
        self._jobs: List[ScheduledJob] = []
        self._task: Optional[asyncio.Task] = None

    @property
    def jobs(self) -> List[ScheduledJob]:
        return list(self._jobs)

    def register(self, name: str, factory: Callable[[], Awaitable[None]], interval_seconds: float) -> None:
        self._jobs.append(ScheduledJob(name=name, factory=factory, interval_seconds=interval_seconds))
        logger.info("Registered scheduled job %s (%ss interval)", name, interval_seconds)

    async def start(self) -> None:
        if not self._jobs:
            logger.warning("No scheduled jobs registered; scheduler idle")
            return
        await asyncio.gather(*(self._run(job) for job in self._jobs))

    def start_background(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self.start(), name="scheduler")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Scheduler stopped")

    async def _run(self, job: ScheduledJob) -> None:
        logger.info("Starting job %s", job.name)
        while True:
            start = time.time()
            try:
                await job.factory()
            except Exception as exc:  # pragma: no cover - defensive log
                logger.exception("Job %s failed: %s", job.name, exc)
            job.runs += 1
            elapsed = time.time() - start
            wait_for = max(job.interval_seconds - elapsed, 0)
            await asyncio.sleep(wait_for)
