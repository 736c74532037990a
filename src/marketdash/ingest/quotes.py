"""Quote line decoding for the Stooq light-quote CSV endpoint.

Upstream line shape (one instrument, no header, optional trailing comma):
    NVDA.US,20260203,220018,186.24,186.27,176.23,180.33,203331497,

A line with fewer than 8 segments cannot be decoded and the instrument is
reported with no current quote. Never substitute zero for a missing price.
"""

from datetime import datetime
from decimal import Decimal

from marketdash.ingest.csv_line import iter_data_lines
from marketdash.ingest.numbers import parse_number
from marketdash.models import Asset, Quote, QuoteRow

QUOTE_FIELD_COUNT = 8
MARKET_STATE_UNKNOWN = "—"

_HUNDRED = Decimal("100")


def decode_quote_line(line: str) -> QuoteRow | None:
    """Decode one quote line, or return None if it has too few segments."""
    parts = line.strip().split(",")
    if len(parts) < QUOTE_FIELD_COUNT:
        return None

    return QuoteRow(
        symbol=parts[0],
        date=parts[1],
        time=parts[2],
        open=parse_number(parts[3]),
        high=parse_number(parts[4]),
        low=parse_number(parts[5]),
        close=parse_number(parts[6]),
        volume=parse_number(parts[7]),
    )


def pct_change(open_: Decimal | None, close: Decimal | None) -> Decimal | None:
    """Percentage change from open to close.

    Formula: (close - open) / open * 100

    Returns None when either side is absent or open is zero.
    """
    if open_ is None or close is None or open_ == 0:
        return None
    return (close - open_) / open_ * _HUNDRED


def first_data_line(text: str) -> str | None:
    """Return the first non-blank line of a response body, if any."""
    lines = iter_data_lines(text)
    return lines[0] if lines else None


def parse_market_time(row: QuoteRow) -> datetime | None:
    """Combine the row's YYYYMMDD date and HHMMSS time, or None if unparseable."""
    if not row.date or not row.time:
        return None
    try:
        return datetime.strptime(f"{row.date} {row.time}", "%Y%m%d %H%M%S")
    except ValueError:
        return None


def build_quote(asset: Asset, row: QuoteRow | None) -> Quote:
    """Build the published Quote for a catalog asset.

    Args:
        asset: Catalog entry supplying display symbol, name and currency.
        row: Decoded upstream row, or None when the fetch or decode failed.

    Returns:
        Quote with price = close. Every derived field is None when row is None.
    """
    if row is None:
        return Quote(
            symbol=asset.symbol,
            name=asset.name,
            price=None,
            change_pct=None,
            currency=asset.currency,
            market_state=MARKET_STATE_UNKNOWN,
            market_time=None,
        )

    return Quote(
        symbol=asset.symbol,
        name=asset.name,
        price=row.close,
        change_pct=pct_change(row.open, row.close),
        currency=asset.currency,
        market_state=MARKET_STATE_UNKNOWN,
        market_time=parse_market_time(row),
    )


def decode_quote_body(asset: Asset, text: str | None) -> Quote:
    """Decode a full quote response body (None if the fetch failed)."""
    line = first_data_line(text) if text else None
    row = decode_quote_line(line) if line else None
    return build_quote(asset, row)
