"""
Daily sweep scheduler - Triggers the expiry sweep once a day.

The sweep runs at a fixed wall-clock hour in the clock's zone. It is
started and stopped by the FastAPI lifespan; the sweep itself runs in a
worker thread because the repository uses blocking psycopg calls.
"""

import asyncio
import logging
from contextlib import suppress
from datetime import datetime, timedelta, timezone

from src.domain.expiry import ExpirySweeper
from src.domain.ports import Clock

logger = logging.getLogger(__name__)


def seconds_until_next_run(now: datetime, hour: int) -> float:
    """
    Seconds from now until the next occurrence of hour:00 in now's zone.

    A run exactly at now is considered past; the next day is returned.
    """
    next_run = now.replace(hour=hour, minute=0, second=0, microsecond=0)
    if next_run <= now:
        next_run = next_run + timedelta(days=1)
    # Compare in UTC so DST changes between now and next_run are counted
    return (next_run.astimezone(timezone.utc) - now.astimezone(timezone.utc)).total_seconds()


class DailySweepScheduler:
    """Runs ExpirySweeper.run() every day at the configured hour."""

    def __init__(self, sweeper: ExpirySweeper, clock: Clock, hour: int) -> None:
        self._sweeper = sweeper
        self._clock = clock
        self._hour = hour
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the background loop (no-op if already running)."""
        if self.running:
            return
        logger.info("Scheduling daily expiry sweep at %02d:00", self._hour)
        self._task = asyncio.create_task(self._loop(), name="expiry-sweep")

    async def stop(self) -> None:
        """Cancel the background loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def run_once(self) -> None:
        """Run one sweep off the event loop, logging any failure."""
        try:
            await asyncio.to_thread(self._sweeper.run)
        except Exception:
            logger.exception("Expiry sweep failed")

    async def _loop(self) -> None:
        while True:
            delay = seconds_until_next_run(self._clock.now(), self._hour)
            logger.debug("Next expiry sweep in %.0f seconds", delay)
            await asyncio.sleep(delay)
            await self.run_once()
