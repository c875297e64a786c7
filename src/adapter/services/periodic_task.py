import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class PeriodicTask:
    """
    Runs an async job every ``interval_seconds`` on the event loop.

    Owned by the application lifespan: ``start`` on startup, ``stop`` on
    shutdown. A failing run is logged and the loop carries on.
    """

    def __init__(
        self,
        name: str,
        interval_seconds: float,
        job: Callable[[], Awaitable[None]],
    ):
        self.name = name
        self.interval_seconds = interval_seconds
        self.job = job
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if not self._task:
            self._task = asyncio.create_task(self._run(), name=self.name)
            logger.info(f"Started periodic task {self.name} every {self.interval_seconds}s")

    async def stop(self):
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
            logger.info(f"Stopped periodic task {self.name}")

    async def _run(self):
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.job()
            except Exception:
                logger.exception(f"Periodic task {self.name} failed")
