# app/core/health.py
import asyncio
import logging
from contextlib import suppress

from fastapi.concurrency import run_in_threadpool

from app.core.errors import StorageUnavailableError
from app.database import ConnectionManager

logger = logging.getLogger(__name__)


class HealthMonitor:
    """
    Background liveness poller for the database pool.

    Every `interval` seconds:
      - ping the active engine
      - on failure, try a reconnect
      - a failed reconnect is retried on the next tick, forever
      - an unexpected error is logged and the loop keeps going
    """

    def __init__(self, connections: ConnectionManager, interval: float):
        self.connections = connections
        self.interval = interval
        self._task: asyncio.Task | None = None

    def check_once(self) -> bool:
        """
        Run one ping/reconnect cycle. Returns True if storage is usable after it.
        """
        try:
            self.connections.ping()
            return True
        except StorageUnavailableError as exc:
            logger.warning("Database connection lost: %s", exc)

        try:
            self.connections.reconnect()
        except StorageUnavailableError as exc:
            logger.error("Failed to reconnect: %s", exc)
            return False

        logger.info("Successfully reconnected to the database")
        return True

    async def run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            # ping/reconnect block on network I/O
            try:
                await run_in_threadpool(self.check_once)
            except Exception:
                logger.exception("Health check failed unexpectedly")

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        with suppress(asyncio.CancelledError):
            await self._task
        self._task = None
