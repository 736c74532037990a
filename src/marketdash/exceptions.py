"""Custom exceptions for the market dashboard.

Only the I/O shell raises these. The ingest layer never raises for
malformed input; it signals with None or by skipping the row.
"""


class MarketDashError(Exception):
    """Base exception for all dashboard errors."""


class UpstreamError(MarketDashError):
    """Raised when a third-party source fails or returns a non-2xx status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnknownSymbolError(MarketDashError):
    """Raised when a requested symbol is not in the asset catalog."""


class SnapshotError(MarketDashError):
    """Raised when the cached disclosure snapshot is missing or malformed."""
