"""Feed services -- combine upstream sources with the ingest layer."""

from marketdash.services.cache import ResponseCache
from marketdash.services.disclosures import DisclosureService
from marketdash.services.history import HistoryService
from marketdash.services.holdings import HoldingsService
from marketdash.services.quote_monitor import QuoteMonitor
from marketdash.services.quotes import QuoteService

__all__ = [
    "DisclosureService",
    "HistoryService",
    "HoldingsService",
    "QuoteMonitor",
    "QuoteService",
    "ResponseCache",
]
