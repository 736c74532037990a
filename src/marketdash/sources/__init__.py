"""Upstream data sources -- asset catalog, HTTP client, snapshot file store."""

from marketdash.sources.assets import HISTORY_SYMBOLS, QUOTE_ASSETS, get_history_asset
from marketdash.sources.client import UpstreamClient
from marketdash.sources.snapshot import SnapshotStore, parse_get_pelosi_payload

__all__ = [
    "HISTORY_SYMBOLS",
    "QUOTE_ASSETS",
    "SnapshotStore",
    "UpstreamClient",
    "get_history_asset",
    "parse_get_pelosi_payload",
]
