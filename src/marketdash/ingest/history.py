"""Daily candle decoding for the Stooq history CSV endpoint.

Expected header: Date,Open,High,Low,Close,Volume
Rows with a missing date or any unparseable OHLC field are dropped, so a
Candle is never constructed with an absent price.
"""

from datetime import date

from marketdash.ingest.csv_line import iter_data_lines
from marketdash.ingest.numbers import parse_number
from marketdash.models import Candle

DEFAULT_DAYS = 120
MIN_DAYS = 30
MAX_DAYS = 400


def decode_candle_row(line: str) -> Candle | None:
    """Decode one history row into a Candle, or None if any field is unusable."""
    parts = line.split(",")
    if len(parts) < 5:
        return None

    raw_date, raw_open, raw_high, raw_low, raw_close = parts[:5]
    try:
        day = date.fromisoformat(raw_date.strip())
    except ValueError:
        return None

    o = parse_number(raw_open)
    h = parse_number(raw_high)
    lo = parse_number(raw_low)
    c = parse_number(raw_close)
    if o is None or h is None or lo is None or c is None:
        return None

    return Candle(date=day, open=o, high=h, low=lo, close=c)


def decode_history_csv(text: str) -> list[Candle]:
    """Decode a full history body, oldest first. The header line is skipped."""
    candles: list[Candle] = []
    for line in iter_data_lines(text)[1:]:
        candle = decode_candle_row(line)
        if candle is not None:
            candles.append(candle)
    return candles


def clamp_days(
    raw: str | int | None,
    default: int = DEFAULT_DAYS,
    minimum: int = MIN_DAYS,
    maximum: int = MAX_DAYS,
) -> int:
    """Clamp a requested window length into [minimum, maximum].

    Non-numeric input falls back to the default before clamping.
    """
    try:
        days = int(raw) if raw is not None else default
    except (TypeError, ValueError):
        days = default
    return min(max(days, minimum), maximum)
