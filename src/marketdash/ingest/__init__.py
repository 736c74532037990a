"""Ingestion and normalization layer.

Pure, synchronous parsers that turn raw upstream text into typed records:
CSV line tokenizing, numeric extraction, quote/candle/holdings decoding,
ticker/name inference, disclosure amount estimation and position
aggregation. Nothing here performs I/O or raises for malformed input.
"""

from marketdash.ingest.amounts import estimate_amount
from marketdash.ingest.csv_line import iter_data_lines, parse_csv_line
from marketdash.ingest.history import clamp_days, decode_candle_row, decode_history_csv
from marketdash.ingest.holdings import decode_holdings_csv, decode_holdings_row, rank_holdings
from marketdash.ingest.inference import (
    CellRule,
    NameInferrer,
    TickerInferrer,
    infer_name,
    infer_ticker,
    match_ticker,
)
from marketdash.ingest.numbers import parse_number
from marketdash.ingest.positions import (
    DISCLAIMER,
    LOGIC,
    PositionAggregator,
    aggregate_disclosure_csv,
    aggregate_positions,
    aggregate_snapshot_trades,
    classify_transaction,
    decode_disclosure_row,
    detect_notes,
    trade_from_snapshot,
)
from marketdash.ingest.quotes import build_quote, decode_quote_body, decode_quote_line, pct_change

__all__ = [
    "DISCLAIMER",
    "LOGIC",
    "CellRule",
    "NameInferrer",
    "PositionAggregator",
    "TickerInferrer",
    "aggregate_disclosure_csv",
    "aggregate_positions",
    "aggregate_snapshot_trades",
    "build_quote",
    "clamp_days",
    "classify_transaction",
    "decode_candle_row",
    "decode_disclosure_row",
    "decode_history_csv",
    "decode_holdings_csv",
    "decode_holdings_row",
    "decode_quote_body",
    "decode_quote_line",
    "detect_notes",
    "estimate_amount",
    "infer_name",
    "infer_ticker",
    "iter_data_lines",
    "match_ticker",
    "parse_csv_line",
    "parse_number",
    "pct_change",
    "rank_holdings",
    "trade_from_snapshot",
]
