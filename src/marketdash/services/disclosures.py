"""Estimated positions from political trade disclosures.

Two input paths feed the same aggregator:
- the community-maintained disclosures CSV (loosely typed, ticker inferred)
- the cached scraped snapshot (structured symbols, validated as-is)

Both reports carry the fixed disclaimer and logic texts verbatim.
"""

import asyncio

from marketdash.config import CacheSettings, ReportSettings, UpstreamSettings
from marketdash.exceptions import SnapshotError
from marketdash.ingest.positions import (
    DISCLAIMER,
    LOGIC,
    PositionAggregator,
    decode_disclosure_csv,
    trade_from_snapshot,
)
from marketdash.logging import get_logger
from marketdash.models import PositionReport
from marketdash.services.cache import ResponseCache
from marketdash.sources.client import TEXT_ACCEPT, UpstreamClient
from marketdash.sources.snapshot import SnapshotStore, parse_get_pelosi_payload

logger = get_logger(__name__)


class DisclosureService:
    """Builds PositionReports from the disclosures CSV or the snapshot file."""

    def __init__(
        self,
        client: UpstreamClient,
        cache: ResponseCache,
        store: SnapshotStore,
        upstream: UpstreamSettings,
        cache_settings: CacheSettings,
        report: ReportSettings,
    ) -> None:
        self._client = client
        self._cache = cache
        self._store = store
        self._upstream = upstream
        self._cache_settings = cache_settings
        self._report = report

    async def estimate_from_csv(self) -> PositionReport:
        """Aggregate the disclosures CSV into ranked estimated positions.

        Raises:
            UpstreamError: If the CSV cannot be fetched.
        """
        url = self._upstream.disclosures_csv_url
        text = await self._cache.get_or_fetch(
            "disclosures:csv",
            self._cache_settings.disclosures_ttl,
            lambda: self._client.fetch_text(url, accept=TEXT_ACCEPT),
        )

        header, trades = decode_disclosure_csv(text)
        aggregator = PositionAggregator()
        for trade in trades:
            aggregator.add(trade)
        positions = aggregator.positions(self._report.positions_top_n)

        logger.info(
            "disclosures_aggregated",
            path="csv",
            decoded=len(trades),
            accepted=aggregator.accepted,
            skipped=aggregator.skipped,
            positions=len(positions),
        )
        return PositionReport(
            positions=positions,
            source=url,
            disclaimer=DISCLAIMER,
            logic=LOGIC,
            header=header,
        )

    async def estimate_from_snapshot(self) -> PositionReport:
        """Aggregate the trades in the cached snapshot file.

        Raises:
            SnapshotError: If the snapshot file is missing or malformed.
        """
        doc = await asyncio.to_thread(self._store.load)

        aggregator = PositionAggregator()
        invalid = 0
        for item in doc["trades"]:
            trade = trade_from_snapshot(item) if isinstance(item, dict) else None
            if trade is None:
                invalid += 1
                continue
            aggregator.add(trade)
        positions = aggregator.positions(self._report.positions_top_n)

        logger.info(
            "disclosures_aggregated",
            path="snapshot",
            invalid_symbols=invalid,
            accepted=aggregator.accepted,
            skipped=aggregator.skipped,
            positions=len(positions),
        )
        return PositionReport(
            positions=positions,
            source=str(doc.get("source") or self._upstream.snapshot_api_url),
            disclaimer=DISCLAIMER,
            logic=LOGIC,
            extra={
                "page": doc.get("page"),
                "fetchedAt": doc.get("fetchedAt"),
                "lastTrade": doc.get("lastTrade"),
            },
        )

    async def refresh_snapshot(self) -> dict:
        """Fetch the upstream snapshot payload and replace the cached file.

        Raises:
            UpstreamError: If the fetch fails.
            SnapshotError: If the payload has an unexpected shape.
        """
        raw = await self._client.fetch_json(self._upstream.snapshot_api_url)
        doc = parse_get_pelosi_payload(
            raw,
            source=self._upstream.snapshot_api_url,
            page=self._upstream.snapshot_page_url,
        )
        if not doc["trades"]:
            raise SnapshotError("Snapshot payload contained no trades")
        await asyncio.to_thread(self._store.save, doc)
        return doc
