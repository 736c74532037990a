"""Shared data models for the market dashboard.

CRITICAL: All prices, amounts and percentages use Decimal. Never use float.
None means "absent" (not decodable) and is never interchangeable with zero.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum


def _str_or_none(value: Decimal | None) -> str | None:
    return str(value) if value is not None else None


class TransactionType(str, Enum):
    """Direction of a disclosed trade."""

    BUY = "buy"
    SELL = "sell"
    OTHER = "other"


@dataclass(frozen=True)
class Asset:
    """Catalog entry mapping a display symbol to its upstream Stooq code."""

    symbol: str
    name: str
    stooq: str
    currency: str = "USD"


@dataclass(frozen=True)
class QuoteRow:
    """One decoded upstream quote line (symbol, date, time, OHLC, volume)."""

    symbol: str
    date: str  # YYYYMMDD as sent upstream
    time: str  # HHMMSS as sent upstream
    open: Decimal | None
    high: Decimal | None
    low: Decimal | None
    close: Decimal | None
    volume: Decimal | None


@dataclass(frozen=True)
class Quote:
    """Latest quote for one catalog instrument."""

    symbol: str
    name: str
    price: Decimal | None
    change_pct: Decimal | None
    currency: str
    market_state: str
    market_time: datetime | None

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict with Decimal values as strings."""
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": _str_or_none(self.price),
            "changePct": _str_or_none(self.change_pct),
            "currency": self.currency,
            "marketState": self.market_state,
            "marketTime": self.market_time.isoformat() if self.market_time else None,
        }


@dataclass(frozen=True)
class Candle:
    """A single daily OHLC candle. Every price field is always present."""

    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict."""
        return {
            "d": self.date.isoformat(),
            "o": str(self.open),
            "h": str(self.high),
            "l": str(self.low),
            "c": str(self.close),
        }


@dataclass(frozen=True)
class Holding:
    """One row of an ETF holdings file."""

    date: str
    fund: str
    company: str
    ticker: str
    shares: Decimal | None
    market_value: Decimal | None
    weight_pct: Decimal | None

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict with Decimal values as strings."""
        return {
            "date": self.date,
            "fund": self.fund,
            "company": self.company,
            "ticker": self.ticker,
            "shares": _str_or_none(self.shares),
            "marketValue": _str_or_none(self.market_value),
            "weightPct": _str_or_none(self.weight_pct),
        }


@dataclass(frozen=True)
class HoldingsSnapshot:
    """Top-N holdings by weight plus the size of the full set."""

    as_of: str | None
    top: list[Holding]
    count: int
    source: str | None = None

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict."""
        return {
            "asOf": self.as_of,
            "top": [h.to_dict() for h in self.top],
            "count": self.count,
            "source": self.source,
        }


@dataclass(frozen=True)
class DisclosedTrade:
    """A single disclosed trade, the unit folded by PositionAggregator."""

    ticker: str
    name: str
    transaction_type: TransactionType
    transaction_date: str
    amount_range_text: str
    description_text: str = ""


@dataclass
class EstimatedPosition:
    """Net estimated exposure for one ticker."""

    ticker: str
    name: str
    net_notional_usd: Decimal
    last_tx_date: str
    notes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict with Decimal values as strings."""
        return {
            "ticker": self.ticker,
            "name": self.name,
            "netNotionalUsd": str(self.net_notional_usd),
            "lastTxDate": self.last_tx_date,
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class PositionReport:
    """Published estimate: ranked positions plus the fixed user-facing texts."""

    positions: list[EstimatedPosition]
    source: str
    disclaimer: str
    logic: str
    header: str | None = None
    extra: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to JSON-safe dict."""
        result = {
            "source": self.source,
            "positions": [p.to_dict() for p in self.positions],
            "disclaimer": self.disclaimer,
            "logic": self.logic,
        }
        if self.header is not None:
            result["header"] = self.header
        result.update(self.extra)
        return result
