"""Heuristic ticker and name inference over loosely-typed disclosure cells.

Column semantics in the disclosure CSV are not reliable, so each inferrer
scans an ordered list of named cell rules and takes the first candidate that
qualifies. Rules can be reordered or extended without touching the matching
logic.
"""

import re
from dataclasses import dataclass

TICKER_RE = re.compile(r"^[A-Z]{1,6}(\.[A-Z]{1,3})?$")
_NON_TICKER_CHARS_RE = re.compile(r"[^A-Z.]")

# A name candidate must be strictly longer than this
MIN_NAME_LENGTH = 6


@dataclass(frozen=True)
class CellRule:
    """Named extraction rule: read one column of a tokenized row."""

    name: str
    column: int

    def candidate(self, cells: list[str]) -> str:
        """Return the trimmed cell this rule points at, or "" if out of range."""
        if self.column >= len(cells):
            return ""
        return cells[self.column].strip()


DISCLOSURE_TICKER_RULES: tuple[CellRule, ...] = (
    CellRule("issuer", 1),
    CellRule("asset", 2),
    CellRule("transaction", 3),
    CellRule("amount", 4),
    CellRule("description", 5),
)

DISCLOSURE_NAME_RULES: tuple[CellRule, ...] = (
    CellRule("issuer", 1),
    CellRule("asset", 2),
)


def match_ticker(cell: str) -> str | None:
    """Reduce a cell to uppercase letters and dots and test it as a ticker.

    Examples: "BRK.B" -> "BRK.B", "(NVDA)" -> "NVDA", "2024-01-05" -> None.
    """
    value = _NON_TICKER_CHARS_RE.sub("", cell)
    return value if TICKER_RE.fullmatch(value) else None


def is_valid_ticker(symbol: str) -> bool:
    """True if an already-structured symbol is a well-formed ticker as-is."""
    return bool(TICKER_RE.fullmatch(symbol))


def infer_ticker(candidates: list[str]) -> str | None:
    """Return the first candidate that reduces to a valid ticker, else None."""
    for cell in candidates:
        ticker = match_ticker(cell)
        if ticker is not None:
            return ticker
    return None


def infer_name(candidates: list[str], ticker: str) -> str:
    """Return the first candidate longer than 6 chars that is not the ticker.

    Falls back to the ticker itself when nothing qualifies.
    """
    for cell in candidates:
        if cell and cell != ticker and len(cell) > MIN_NAME_LENGTH:
            return cell
    return ticker


class TickerInferrer:
    """Applies infer_ticker to the cells selected by an ordered ruleset."""

    def __init__(self, rules: tuple[CellRule, ...] = DISCLOSURE_TICKER_RULES) -> None:
        self._rules = rules

    def infer(self, cells: list[str]) -> str | None:
        return infer_ticker([rule.candidate(cells) for rule in self._rules])


class NameInferrer:
    """Applies infer_name to the cells selected by an ordered ruleset."""

    def __init__(self, rules: tuple[CellRule, ...] = DISCLOSURE_NAME_RULES) -> None:
        self._rules = rules

    def infer(self, cells: list[str], ticker: str) -> str:
        return infer_name([rule.candidate(cells) for rule in self._rules], ticker)
