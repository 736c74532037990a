"""Quote monitor -- keeps the quote board warm with periodic REST polling.

Quotes are shown with a ~20s freshness window, so polling at the same
interval is sufficient; there is no push channel to clients.
"""

import asyncio
import time

from marketdash.logging import get_logger
from marketdash.models import Quote
from marketdash.services.quotes import QuoteService

logger = get_logger(__name__)


class QuoteMonitor:
    """Polls QuoteService in the background and caches the latest board."""

    def __init__(self, quote_service: QuoteService, poll_interval: float = 20.0) -> None:
        self._quote_service = quote_service
        self._poll_interval = poll_interval
        self._quotes: list[Quote] = []
        self._updated_at: float | None = None
        self._running = False
        self._task: asyncio.Task | None = None  # type: ignore[type-arg]

    @property
    def updated_at(self) -> float | None:
        """Unix timestamp of the last successful poll, or None."""
        return self._updated_at

    async def start(self) -> None:
        """Begin polling quotes in the background."""
        if self._running:
            logger.warning("quote_monitor_already_running")
            return
        self._running = True
        self._task = asyncio.create_task(self._poll_loop())
        logger.info("quote_monitor_started", poll_interval=self._poll_interval)

    async def stop(self) -> None:
        """Stop the monitor gracefully."""
        self._running = False
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("quote_monitor_stopped")

    async def _poll_loop(self) -> None:
        while self._running:
            try:
                await self.poll_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.warning("quote_monitor_poll_error", exc_info=True)
            if self._running:
                await asyncio.sleep(self._poll_interval)

    async def poll_once(self) -> list[Quote]:
        """Fetch the full board once and replace the cached copy."""
        quotes = await self._quote_service.fetch_quotes()
        self._quotes = quotes
        self._updated_at = time.time()
        return quotes

    def is_stale(self) -> bool:
        """True if no board has been polled yet or the last poll is older than the interval."""
        if self._updated_at is None:
            return True
        return time.time() - self._updated_at > self._poll_interval

    async def get_quotes(self) -> list[Quote]:
        """Return the latest board, polling on demand when it is missing or stale.

        With the background loop disabled every read past the interval refreshes
        the board, so quotes never outlive one poll interval.
        """
        if self.is_stale():
            return await self.poll_once()
        return list(self._quotes)
