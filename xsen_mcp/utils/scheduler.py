"""Periodic background tasks owned by the application lifespan."""

import asyncio
import contextlib
from collections.abc import Awaitable, Callable
from typing import Any

from xsen_mcp.utils.logging import get_logger

logger = get_logger(__name__)


class PeriodicTask:
    """
    Runs an async callable after `initial_delay`, then every `interval` seconds until stopped.

    Exceptions raised by a run are logged and the schedule continues with the next tick.
    """

    def __init__(
        self,
        name: str,
        func: Callable[[], Awaitable[Any]],
        interval: float,
        initial_delay: float = 0.0,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"Task '{name}' needs a positive interval, got {interval}")
        self.name = name
        self.func = func
        self.interval = interval
        self.initial_delay = initial_delay
        self.runs = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedules the task on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name=self.name)
        logger.info(
            "periodic_task_started",
            task=self.name,
            interval_seconds=self.interval,
            initial_delay_seconds=self.initial_delay,
        )

    async def stop(self) -> None:
        """Cancels the task and waits for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("periodic_task_stopped", task=self.name, runs=self.runs)

    async def run_once(self) -> None:
        """Runs the callable a single time, logging instead of raising."""
        self.runs += 1
        try:
            await self.func()
        except Exception as e:
            logger.error("periodic_task_failed", task=self.name, error=str(e), exc_info=True)

    async def _run(self) -> None:
        await asyncio.sleep(self.initial_delay)
        while True:
            await self.run_once()
            await asyncio.sleep(self.interval)
