"""Net notional position estimation from disclosed trades.

Each pass folds a trade stream into an insertion-ordered ticker -> accumulator
map:

  net         += sign * midpoint   (purchase/buy = +1, sale/sell = -1)
  last_tx_date = max(current, new) by string compare (ISO dates sort correctly)
  notes       |= options annotations found in the description

Trades without a ticker, with an unclassifiable type or an unestimatable
amount are excluded outright. Positions with a final net of exactly zero are
omitted. Output is sorted by |net| descending; ties keep first-seen order.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

from marketdash.ingest.amounts import estimate_amount
from marketdash.ingest.csv_line import iter_data_lines, parse_csv_line
from marketdash.ingest.inference import NameInferrer, TickerInferrer, is_valid_ticker
from marketdash.models import DisclosedTrade, EstimatedPosition, TransactionType

DEFAULT_TOP_N = 20
DISCLOSURE_MIN_FIELDS = 5

DISCLAIMER = (
    "Estimated positions are inferred from public disclosure amount ranges; "
    "they are not confirmed real-time holdings."
)
LOGIC = (
    "We parse each disclosed trade, convert the USD amount range to its midpoint "
    "(Over X -> 1.25*X), treat Purchase as +notional and Sale as -notional, and "
    "aggregate by ticker. Options are counted as notional exposure only."
)

_BUY_RE = re.compile(r"purchase|buy", re.IGNORECASE)
_SELL_RE = re.compile(r"sale|sell", re.IGNORECASE)

# (pattern, note) pairs checked against the free-text description, in order
_NOTE_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"call", re.IGNORECASE), "Options: Call"),
    (re.compile(r"put", re.IGNORECASE), "Options: Put"),
)

_SIGNS = {TransactionType.BUY: 1, TransactionType.SELL: -1}
_ZERO = Decimal("0")


def classify_transaction(text: str) -> TransactionType:
    """Classify free-text transaction type. Buy keywords win over sell keywords."""
    if _BUY_RE.search(text):
        return TransactionType.BUY
    if _SELL_RE.search(text):
        return TransactionType.SELL
    return TransactionType.OTHER


def detect_notes(description: str) -> list[str]:
    """Return annotation notes found in a trade description."""
    return [note for pattern, note in _NOTE_RULES if pattern.search(description)]


def decode_disclosure_row(
    cols: list[str],
    ticker_inferrer: TickerInferrer | None = None,
    name_inferrer: NameInferrer | None = None,
) -> DisclosedTrade | None:
    """Decode one tokenized disclosure CSV row.

    Positional layout: 0 date, 3 transaction type, 4 amount range,
    5 description. Ticker and name are inferred from the candidate columns.

    Returns:
        DisclosedTrade, or None if the row is too short or has no ticker.
    """
    if len(cols) < DISCLOSURE_MIN_FIELDS:
        return None

    cells = [c.strip() for c in cols]
    ticker = (ticker_inferrer or TickerInferrer()).infer(cells)
    if ticker is None:
        return None

    name = (name_inferrer or NameInferrer()).infer(cells, ticker)
    return DisclosedTrade(
        ticker=ticker,
        name=name,
        transaction_type=classify_transaction(cells[3]),
        transaction_date=cells[0],
        amount_range_text=cells[4],
        description_text=cells[5] if len(cells) > 5 else "",
    )


def _text(item: dict, key: str) -> str:
    value = item.get(key)
    return str(value).strip() if value is not None else ""


def trade_from_snapshot(item: dict) -> DisclosedTrade | None:
    """Convert one structured snapshot trade into a DisclosedTrade.

    The symbol is already a discrete field here, so no inference is done:
    the upper-cased symbol must be a valid ticker or the trade is skipped.
    """
    ticker = _text(item, "symbol").upper()
    if not is_valid_ticker(ticker):
        return None

    return DisclosedTrade(
        ticker=ticker,
        name=_text(item, "fullName") or ticker,
        transaction_type=classify_transaction(_text(item, "transactionType")),
        transaction_date=_text(item, "transactionDate"),
        amount_range_text=_text(item, "amount"),
        description_text=_text(item, "description"),
    )


@dataclass
class _Accumulator:
    name: str
    net: Decimal
    last: str
    notes: dict[str, None] = field(default_factory=dict)


class PositionAggregator:
    """Folds disclosed trades into per-ticker net notional exposure.

    One instance per aggregation pass; nothing is shared between passes.

    Usage:
        aggregator = PositionAggregator()
        for trade in trades:
            aggregator.add(trade)
        positions = aggregator.positions(top_n=20)
    """

    def __init__(self) -> None:
        self._by_ticker: dict[str, _Accumulator] = {}
        self.accepted = 0
        self.skipped = 0

    def add(self, trade: DisclosedTrade) -> bool:
        """Fold one trade in. Returns False if the trade was excluded."""
        sign = _SIGNS.get(trade.transaction_type)
        if sign is None or not trade.ticker:
            self.skipped += 1
            return False

        mid = estimate_amount(trade.amount_range_text)
        if mid is None:
            self.skipped += 1
            return False

        acc = self._by_ticker.get(trade.ticker)
        if acc is None:
            acc = _Accumulator(name=trade.name, net=_ZERO, last=trade.transaction_date)
            self._by_ticker[trade.ticker] = acc

        acc.name = acc.name or trade.name
        acc.net += sign * mid
        if trade.transaction_date > acc.last:
            acc.last = trade.transaction_date
        for note in detect_notes(trade.description_text):
            acc.notes.setdefault(note, None)

        self.accepted += 1
        return True

    def positions(self, top_n: int = DEFAULT_TOP_N) -> list[EstimatedPosition]:
        """Emit non-zero positions by |net| descending, truncated to top_n."""
        result = [
            EstimatedPosition(
                ticker=ticker,
                name=acc.name,
                net_notional_usd=acc.net,
                last_tx_date=acc.last,
                notes=list(acc.notes),
            )
            for ticker, acc in self._by_ticker.items()
            if acc.net != 0
        ]
        # sorted() is stable, so equal magnitudes keep insertion order
        result.sort(key=lambda p: abs(p.net_notional_usd), reverse=True)
        return result[:top_n]


def aggregate_positions(
    trades: Iterable[DisclosedTrade], top_n: int = DEFAULT_TOP_N
) -> list[EstimatedPosition]:
    """Aggregate a trade stream in a fresh pass and return the ranked positions."""
    aggregator = PositionAggregator()
    for trade in trades:
        aggregator.add(trade)
    return aggregator.positions(top_n)


def decode_disclosure_csv(text: str) -> tuple[str, list[DisclosedTrade]]:
    """Decode a disclosure CSV body into (header line, decodable trades)."""
    lines = iter_data_lines(text)
    header = lines[0] if lines else ""
    ticker_inferrer = TickerInferrer()
    name_inferrer = NameInferrer()

    trades: list[DisclosedTrade] = []
    for line in lines[1:]:
        trade = decode_disclosure_row(parse_csv_line(line), ticker_inferrer, name_inferrer)
        if trade is not None:
            trades.append(trade)
    return header, trades


def aggregate_disclosure_csv(
    text: str, top_n: int = DEFAULT_TOP_N
) -> tuple[str, list[EstimatedPosition]]:
    """Decode and aggregate a disclosure CSV body in one pass."""
    header, trades = decode_disclosure_csv(text)
    return header, aggregate_positions(trades, top_n)


def aggregate_snapshot_trades(
    items: Iterable[dict], top_n: int = DEFAULT_TOP_N
) -> list[EstimatedPosition]:
    """Aggregate structured snapshot trades; invalid symbols are skipped."""
    trades = (trade_from_snapshot(item) for item in items if isinstance(item, dict))
    return aggregate_positions((t for t in trades if t is not None), top_n)
