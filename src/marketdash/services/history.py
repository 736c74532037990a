"""Daily candle history for a single catalog symbol.

One symbol per request to avoid bursts of outbound calls. The upstream
window always spans the maximum allowed days plus a few weeks of padding
for weekends and holidays, so one cached body per symbol per day serves
every requested window length.
"""

from datetime import date, timedelta

from marketdash.config import CacheSettings, ReportSettings, UpstreamSettings
from marketdash.ingest.history import clamp_days, decode_history_csv
from marketdash.logging import get_logger, log_context
from marketdash.models import Candle
from marketdash.services.cache import ResponseCache
from marketdash.sources.assets import get_history_asset
from marketdash.sources.client import UpstreamClient

logger = get_logger(__name__)


def _ymd(d: date) -> str:
    return d.strftime("%Y%m%d")


class HistoryService:
    """Fetches and decodes candle history from the Stooq history endpoint."""

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

    def clamp(self, raw_days: str | int | None) -> int:
        """Clamp a requested window using the configured bounds."""
        return clamp_days(
            raw_days,
            default=self._report.history_default_days,
            minimum=self._report.history_min_days,
            maximum=self._report.history_max_days,
        )

    async def get_candles(
        self,
        symbol: str,
        raw_days: str | int | None = None,
        today: date | None = None,
    ) -> list[Candle]:
        """Return the most recent `days` candles for symbol, oldest first.

        Raises:
            UnknownSymbolError: If the symbol has no configured history.
            UpstreamError: If the upstream fetch fails.
        """
        asset = get_history_asset(symbol)
        days = self.clamp(raw_days)

        end = today or date.today()
        span = self._report.history_max_days + self._report.history_padding_days
        start = end - timedelta(days=span)
        params = {"s": asset.stooq, "i": "d", "d1": _ymd(start), "d2": _ymd(end)}

        async def _fetch() -> str:
            return await self._client.fetch_text(self._upstream.stooq_history_url, params=params)

        with log_context(symbol=asset.symbol):
            text = await self._cache.get_or_fetch(
                f"history:{asset.stooq}:{params['d2']}",
                self._cache_settings.history_ttl,
                _fetch,
            )
            candles = decode_history_csv(text)
            logger.debug("history_decoded", candles=len(candles), days=days)
        return candles[-days:]
