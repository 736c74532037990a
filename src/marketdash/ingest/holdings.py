"""ETF holdings file decoding and weight ranking.

Expected header:
    date,fund,company,ticker,cusip,shares,market value ($),weight (%)

Rows with fewer than 8 columns are discarded whole, never partially decoded.
"""

from decimal import Decimal

from marketdash.ingest.csv_line import iter_data_lines, parse_csv_line
from marketdash.ingest.numbers import parse_number
from marketdash.models import Holding, HoldingsSnapshot

HOLDINGS_FIELD_COUNT = 8
DEFAULT_TOP_N = 15

_ZERO = Decimal("0")


def decode_holdings_row(cols: list[str]) -> Holding | None:
    """Decode one tokenized holdings row. The cusip column is ignored."""
    if len(cols) < HOLDINGS_FIELD_COUNT:
        return None

    row_date, fund, company, ticker, _cusip, shares, market_value, weight = cols[:8]
    return Holding(
        date=row_date,
        fund=fund,
        company=company,
        ticker=ticker,
        shares=parse_number(shares),
        market_value=parse_number(market_value),
        weight_pct=parse_number(weight),
    )


def decode_holdings_csv(text: str) -> list[Holding]:
    """Decode every data row of a holdings file, in file order."""
    holdings: list[Holding] = []
    for line in iter_data_lines(text)[1:]:
        holding = decode_holdings_row(parse_csv_line(line))
        if holding is not None:
            holdings.append(holding)
    return holdings


def rank_holdings(
    holdings: list[Holding],
    top_n: int = DEFAULT_TOP_N,
    source: str | None = None,
) -> HoldingsSnapshot:
    """Rank holdings by weight descending and keep the top N.

    Absent weights sort as zero; the published weight stays None. The sort is
    stable, so equal weights keep input order.

    Args:
        holdings: Decoded holdings in file order.
        top_n: Number of holdings to publish.
        source: Upstream URL to report alongside the snapshot.

    Returns:
        HoldingsSnapshot whose as_of is the date of the highest-weight holding.
    """
    ranked = sorted(
        holdings,
        key=lambda h: h.weight_pct if h.weight_pct is not None else _ZERO,
        reverse=True,
    )
    return HoldingsSnapshot(
        as_of=ranked[0].date if ranked else None,
        top=ranked[:top_n],
        count=len(ranked),
        source=source,
    )
