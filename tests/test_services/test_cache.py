"""Tests for the shared response cache."""

import time
from unittest.mock import AsyncMock

import pytest

from marketdash.exceptions import UpstreamError
from marketdash.services.cache import ResponseCache


@pytest.fixture
def cache() -> ResponseCache:
    """Fresh ResponseCache instance."""
    return ResponseCache()


class TestResponseCache:
    """Tests for ResponseCache."""

    @pytest.mark.asyncio
    async def test_put_and_get(self, cache: ResponseCache) -> None:
        await cache.put("quote:nvda.us", "body", ttl_seconds=20)
        assert await cache.get("quote:nvda.us", max_age_seconds=20) == "body"

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self, cache: ResponseCache) -> None:
        assert await cache.get("missing", max_age_seconds=20) is None

    @pytest.mark.asyncio
    async def test_stale_entry_returns_none(self, cache: ResponseCache) -> None:
        await cache.put("quote:nvda.us", "body", ttl_seconds=600, timestamp=time.time() - 60)
        assert await cache.get("quote:nvda.us", max_age_seconds=20) is None
        assert await cache.get("quote:nvda.us", max_age_seconds=600) == "body"

    @pytest.mark.asyncio
    async def test_expired_entries_evicted_on_put(self, cache: ResponseCache) -> None:
        await cache.put("history:nvda.us:20260201", "old", ttl_seconds=60, timestamp=time.time() - 120)
        await cache.put("holdings:arkk", "live", ttl_seconds=600, timestamp=time.time() - 120)
        await cache.put("history:nvda.us:20260203", "new", ttl_seconds=60)
        assert set(cache._entries) == {"holdings:arkk", "history:nvda.us:20260203"}

    @pytest.mark.asyncio
    async def test_get_or_fetch_caches_result(self, cache: ResponseCache) -> None:
        fetch = AsyncMock(return_value="fresh")
        assert await cache.get_or_fetch("k", 20, fetch) == "fresh"
        assert await cache.get_or_fetch("k", 20, fetch) == "fresh"
        fetch.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_get_or_fetch_refetches_when_stale(self, cache: ResponseCache) -> None:
        await cache.put("k", "old", ttl_seconds=20, timestamp=time.time() - 100)
        fetch = AsyncMock(return_value="new")
        assert await cache.get_or_fetch("k", 20, fetch) == "new"
        fetch.assert_awaited_once()
        assert len(cache._entries) == 1

    @pytest.mark.asyncio
    async def test_fetch_error_propagates_and_is_not_cached(self, cache: ResponseCache) -> None:
        fetch = AsyncMock(side_effect=UpstreamError("boom"))
        with pytest.raises(UpstreamError):
            await cache.get_or_fetch("k", 20, fetch)
        assert await cache.get("k", 20) is None

    @pytest.mark.asyncio
    async def test_clear(self, cache: ResponseCache) -> None:
        await cache.put("k", "v", ttl_seconds=20)
        await cache.clear()
        assert await cache.get("k", 20) is None
