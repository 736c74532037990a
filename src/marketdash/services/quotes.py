"""Quote board service -- one Stooq request per instrument, fanned out in parallel.

A failed or undecodable instrument is reported with an absent price; it
never fails the board and never shows as zero.
"""

import asyncio

from marketdash.config import CacheSettings, UpstreamSettings
from marketdash.exceptions import UpstreamError
from marketdash.ingest.quotes import decode_quote_body
from marketdash.logging import get_logger, log_context
from marketdash.models import Asset, Quote
from marketdash.services.cache import ResponseCache
from marketdash.sources.assets import QUOTE_ASSETS
from marketdash.sources.client import UpstreamClient

logger = get_logger(__name__)


class QuoteService:
    """Fetches and decodes the latest quote for every catalog asset."""

    def __init__(
        self,
        client: UpstreamClient,
        cache: ResponseCache,
        upstream: UpstreamSettings,
        cache_settings: CacheSettings,
        assets: tuple[Asset, ...] = QUOTE_ASSETS,
    ) -> None:
        self._client = client
        self._cache = cache
        self._upstream = upstream
        self._cache_settings = cache_settings
        self._assets = assets

    async def fetch_quotes(self) -> list[Quote]:
        """Return one Quote per catalog asset, in catalog order."""
        quotes = await asyncio.gather(*(self._fetch_one(a) for a in self._assets))
        missing = sum(1 for q in quotes if q.price is None)
        logger.debug("quotes_fetched", count=len(quotes), missing=missing)
        return list(quotes)

    async def _fetch_one(self, asset: Asset) -> Quote:
        url = self._upstream.stooq_quote_url
        params = {"s": asset.stooq, "i": "d"}

        async def _fetch() -> str:
            return await self._client.fetch_text(url, params=params)

        with log_context(symbol=asset.symbol):
            try:
                text: str | None = await self._cache.get_or_fetch(
                    f"quote:{asset.stooq}", self._cache_settings.quotes_ttl, _fetch
                )
            except UpstreamError as e:
                logger.warning("quote_fetch_failed", error=str(e))
                text = None

        quote = decode_quote_body(asset, text)
        if text is not None and quote.price is None:
            logger.debug("quote_undecodable", symbol=asset.symbol)
        return quote
