import asyncio
import contextlib
import logging

from domain.exceptions.currency import WakeupError
from infrastructure.providers.run_job import RunJobClient

logger = logging.getLogger(__name__)


class KeepAliveWorker:
    """
    Background task that pings the price refresh job so it stays warm.

    The first ping goes out as soon as the worker starts, then one every
    ``interval`` seconds until ``stop()`` is called.
    """
    def __init__(
            self,
            client: RunJobClient,
            base_url: str,
            token: str,
            interval: float = 60
    ):
        self.client = client
        self.base_url = base_url
        self.token = token
        self.interval = interval
        self._task: asyncio.Task | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def ping(self) -> bool:
        if not self.base_url or not self.token:
            logger.debug("Keep-alive ping skipped: run URL or token not configured")
            return False

        try:
            await self.client.ping(self.base_url, self.token)
        except WakeupError as e:
            logger.warning(f"Keep-alive ping failed: {e}")
            return False
        return True

    async def run(self) -> None:
        logger.info(f"Keep-alive worker started, pinging every {self.interval}s")
        try:
            while True:
                await self.ping()
                await asyncio.sleep(self.interval)
        except asyncio.CancelledError:
            logger.info("Keep-alive worker stopped")
            raise

    def start(self) -> None:
        # At most one loop per worker.
        if self.is_running:
            return
        self._task = asyncio.create_task(self.run())

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
