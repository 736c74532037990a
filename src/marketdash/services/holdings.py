"""ARKK holdings snapshot service."""

from marketdash.config import CacheSettings, ReportSettings, UpstreamSettings
from marketdash.exceptions import UpstreamError
from marketdash.ingest.holdings import decode_holdings_csv, rank_holdings
from marketdash.logging import get_logger
from marketdash.models import HoldingsSnapshot
from marketdash.services.cache import ResponseCache
from marketdash.sources.client import UpstreamClient

logger = get_logger(__name__)


class HoldingsService:
    """Fetches the published holdings CSV and ranks it by weight."""

    def __init__(
        self,
        client: UpstreamClient,
        cache: ResponseCache,
        upstream: UpstreamSettings,
        cache_settings: CacheSettings,
        report: ReportSettings,
    ) -> None:
        self._client = client
        self._cache = cache
        self._upstream = upstream
        self._cache_settings = cache_settings
        self._report = report

    async def get_snapshot(self) -> HoldingsSnapshot:
        """Return the top-N holdings by weight.

        Raises:
            UpstreamError: If the fetch fails, or the body decodes to no rows.
        """
        url = self._upstream.arkk_holdings_url
        text = await self._cache.get_or_fetch(
            "holdings:arkk",
            self._cache_settings.holdings_ttl,
            lambda: self._client.fetch_text(url),
        )

        holdings = decode_holdings_csv(text)
        if not holdings:
            raise UpstreamError("Holdings file contained no decodable rows")

        snapshot = rank_holdings(holdings, top_n=self._report.holdings_top_n, source=url)
        logger.debug("holdings_ranked", count=snapshot.count, as_of=snapshot.as_of)
        return snapshot
