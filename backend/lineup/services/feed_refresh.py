"""
Background feed refresher: regenerates the stored JSON and XML schedule
feeds every `schedule_xml_refresh_interval` minutes.
"""
import asyncio
import logging
from typing import Optional

from lineup.config import settings
from lineup.db.session import get_db
from lineup.services import settings_service
from lineup.services.feed_service import FORMAT_JSON, FORMAT_XML, FeedService

logger = logging.getLogger(__name__)


class FeedRefresher:
    def __init__(self, default_interval: int = settings.FEED_REFRESH_DEFAULT_MINUTES):
        self.default_interval = default_interval
        self.interval = default_interval  # minutes
        self.running = False
        self._task: Optional[asyncio.Task] = None
        self._wake = asyncio.Event()

    async def start(self):
        if self.running:
            logger.warning("Feed refresher already running")
            return
        self.running = True
        self._wake = asyncio.Event()
        self._task = asyncio.create_task(self._run_loop())
        logger.info("Feed refresher started")

    async def stop(self):
        self.running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Feed refresher stopped")

    def set_interval(self, minutes: int) -> None:
        """Apply a new interval; a sleeping loop wakes up and reschedules."""
        self.interval = max(1, minutes)
        self._wake.set()
        logger.info("Feed refresh interval set to %d minutes", self.interval)

    async def refresh_once(self) -> None:
        async for db in get_db():
            self.interval = await settings_service.get_int(
                db, settings_service.SCHEDULE_XML_REFRESH_INTERVAL, self.default_interval
            )
            feeds = FeedService(db)
            await feeds.generate(FORMAT_JSON)
            await feeds.generate(FORMAT_XML)
            break

    async def _run_loop(self):
        while self.running:
            try:
                await self.refresh_once()
            except Exception as e:
                logger.error(f"Feed refresh error: {e}", exc_info=True)

            self._wake.clear()
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=self.interval * 60)
            except asyncio.TimeoutError:
                pass


_refresher: Optional[FeedRefresher] = None


def get_feed_refresher() -> FeedRefresher:
    global _refresher
    if _refresher is None:
        _refresher = FeedRefresher()
    return _refresher


async def start_feed_refresher():
    await get_feed_refresher().start()


async def stop_feed_refresher():
    await get_feed_refresher().stop()
