"""Numeric extraction from noisy upstream text.

CRITICAL: Returns None (absent) rather than Decimal("0") for anything that
cannot be parsed. A present zero and missing data must stay distinguishable.
"""

import re
from decimal import Decimal, InvalidOperation

_DECORATION_RE = re.compile(r"[$,%\s]")
# Plain ASCII decimal or exponent notation; Decimal() alone also accepts
# underscores, non-ASCII digits and NaN/Infinity spellings
_NUMERIC_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)

# Sentinel used by the Stooq feed for "no data"
NO_DATA = "N/D"


def parse_number(text: str | None) -> Decimal | None:
    """Strip currency/percent decoration and parse the rest as a Decimal.

    Args:
        text: Raw cell text, e.g. "$1,234.50", "12%", " 7 ", "N/D".

    Returns:
        The parsed value, or None when the cleaned text is empty, the
        N/D sentinel, or not plain ASCII numeric text.
    """
    if not text:
        return None

    clean = _DECORATION_RE.sub("", text)
    if not clean or clean.upper() == NO_DATA or not _NUMERIC_RE.fullmatch(clean):
        return None

    try:
        return Decimal(clean)
    except InvalidOperation:
        return None
