"""
Periodic sweep of expired builds.
Runs one sweep at startup, then every interval until the process shuts down.
"""

import asyncio
import logging
from typing import Optional

from repositories.file_store import BuildStore, now_ms

logger = logging.getLogger(__name__)


class CleanupScheduler:
    """Background asyncio task calling BuildStore.evict on a fixed interval."""

    def __init__(self, store: BuildStore, interval_seconds: float):
        self.store = store
        self.interval_seconds = interval_seconds
        self.next_run_ms: Optional[int] = None
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def run_once(self) -> Optional[int]:
        """Sweep now. Returns the surviving record count, or None if the sweep failed."""
        try:
            kept = self.store.evict()
        except Exception as e:
            # keep the loop alive; the next tick retries
            logger.error("Cleanup sweep failed: %s", e, exc_info=True)
            return None
        return len(kept)

    def _schedule_next(self) -> None:
        self.next_run_ms = now_ms() + int(self.interval_seconds * 1000)

    async def _loop(self) -> None:
        while True:
            self._schedule_next()
            await asyncio.sleep(self.interval_seconds)
            self.run_once()

    def start(self) -> None:
        if self.running:
            return
        self.run_once()
        self._schedule_next()
        self._task = asyncio.create_task(self._loop())
        logger.info("Cleanup scheduled every %ss", self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        self.next_run_ms = None
