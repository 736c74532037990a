"""Disclosed USD amount range to single-point estimate.

Policy, applied in order:
  1. Strip "$". "None" (any case) -> absent.
  2. "Over N" -> N * 1.25 (projects the open upper bound to a point).
  3. "A - B" -> (A + B) / 2.
  4. Anything else -> absent.

The multipliers are product policy and must not be "improved". An absent
estimate excludes the trade from aggregation; it never counts as zero.
"""

import re
from decimal import Decimal, InvalidOperation

OVER_MULTIPLIER = Decimal("1.25")

_NONE_RE = re.compile(r"^none$", re.IGNORECASE)
_OVER_RE = re.compile(r"over\s+([\d,]+)", re.IGNORECASE | re.ASCII)
_RANGE_RE = re.compile(r"([\d,]+)\s*-\s*([\d,]+)", re.ASCII)

_TWO = Decimal("2")


def _grouped_int(text: str) -> Decimal | None:
    digits = text.replace(",", "")
    if not digits:
        return None
    try:
        return Decimal(digits)
    except InvalidOperation:
        return None


def estimate_amount(text: str | None) -> Decimal | None:
    """Convert a disclosed amount range into a representative midpoint.

    Examples:
        "250,001 - 500,000" -> 375000.5
        "$1,001 - $15,000"  -> 8000.5
        "Over 1,000,000"    -> 1250000
        "None"              -> None
    """
    if not text:
        return None

    s = text.replace("$", "").strip()
    if not s or _NONE_RE.match(s):
        return None

    over = _OVER_RE.search(s)
    if over:
        low = _grouped_int(over.group(1))
        return low * OVER_MULTIPLIER if low is not None else None

    bounded = _RANGE_RE.search(s)
    if not bounded:
        return None

    a = _grouped_int(bounded.group(1))
    b = _grouped_int(bounded.group(2))
    if a is None or b is None:
        return None
    return (a + b) / _TWO
