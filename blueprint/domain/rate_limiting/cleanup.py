"""Periodic sweep of expired rate-limit windows.

Expired windows are already ignored by `check_limit`, so the sweep only bounds
memory. The task is started and stopped explicitly by the application
lifespan; nothing runs on import.
"""

import asyncio
from typing import Optional

import structlog

from .services import FixedWindowRateLimiter

logger = structlog.get_logger(__name__)


class RateLimitCleanupTask:
    """Calls `FixedWindowRateLimiter.cleanup` every ``interval_seconds``.

    Args:
        rate_limiter: Limiter to sweep.
        interval_seconds: Delay between sweeps.
    """

    def __init__(self, rate_limiter: FixedWindowRateLimiter, interval_seconds: float = 300):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._rate_limiter = rate_limiter
        self._interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self._stop_event: Optional[asyncio.Event] = None

    @property
    def interval_seconds(self) -> float:
        return self._interval_seconds

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop. Idempotent."""
        if self.is_running:
            return
        self._stop_event = asyncio.Event()
        self._task = asyncio.create_task(self._run(self._stop_event))
        logger.info("Rate limit cleanup task started", interval_seconds=self._interval_seconds)

    async def stop(self) -> None:
        """Stop the sweep loop and wait for it to finish.

        Cancelling the caller while it waits still cancels the caller.
        """
        if self._task is None:
            return
        task, self._task = self._task, None
        if self._stop_event is not None:
            self._stop_event.set()
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
        logger.info("Rate limit cleanup task stopped")

    async def _run(self, stop_event: asyncio.Event) -> None:
        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._interval_seconds)
            except asyncio.TimeoutError:
                self.run_once()

    def run_once(self) -> int:
        """Sweep now. A failing sweep is logged and retried on the next tick."""
        try:
            return self._rate_limiter.cleanup()
        except Exception as exc:
            logger.error("Rate limit cleanup failed", error=str(exc), exc_info=True)
            return 0
