"""Shared in-memory cache of upstream response bodies.

Each feed has its own freshness window (quotes 20s, holdings 10 min, ...),
so entries store their fetch time and TTL. Expired entries are dropped on
every write, so the cache never holds more than one live body per key.
Uses asyncio.Lock for safe concurrent reads/writes from the fetch fan-out.
"""

import asyncio
import time
from collections.abc import Awaitable, Callable

from marketdash.logging import get_logger

logger = get_logger(__name__)


class ResponseCache:
    """In-memory body cache with staleness detection and expiry pruning."""

    def __init__(self) -> None:
        # key -> (body, stored_at, ttl_seconds)
        self._entries: dict[str, tuple[str, float, float]] = {}
        self._lock = asyncio.Lock()

    async def put(
        self,
        key: str,
        body: str,
        ttl_seconds: float,
        timestamp: float | None = None,
    ) -> None:
        """Store a body under key, stamped with timestamp (default now).

        Entries whose TTL has run out are evicted before the new body is stored.
        """
        now = time.time()
        async with self._lock:
            expired = [k for k, (_, ts, ttl) in self._entries.items() if now - ts > ttl]
            for k in expired:
                del self._entries[k]
            self._entries[key] = (body, timestamp if timestamp is not None else now, ttl_seconds)
            size = len(self._entries)
        if expired:
            logger.debug("cache_pruned", removed=len(expired), size=size)

    async def get(self, key: str, max_age_seconds: float) -> str | None:
        """Return the cached body if present and fresh, else None."""
        async with self._lock:
            entry = self._entries.get(key)
        if entry is None or time.time() - entry[1] > max_age_seconds:
            return None
        return entry[0]

    async def get_or_fetch(
        self,
        key: str,
        max_age_seconds: float,
        fetch: Callable[[], Awaitable[str]],
    ) -> str:
        """Return a fresh cached body, or await fetch() and cache its result.

        Errors raised by fetch() propagate and nothing is cached.
        """
        body = await self.get(key, max_age_seconds)
        if body is not None:
            logger.debug("cache_hit", key=key)
            return body

        body = await fetch()
        await self.put(key, body, max_age_seconds)
        return body

    async def clear(self) -> None:
        async with self._lock:
            self._entries.clear()
