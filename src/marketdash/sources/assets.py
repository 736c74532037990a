"""Instrument catalog for the quote board and the candle charts.

Stooq does not reliably serve the Nasdaq 100 cash index, so NDX is proxied
by the NQ.F front-month future.
"""

from marketdash.exceptions import UnknownSymbolError
from marketdash.models import Asset

# Index and gold first, then single names
QUOTE_ASSETS: tuple[Asset, ...] = (
    Asset("NDX", "Nasdaq 100", "nq.f"),
    Asset("XAUUSD", "Gold / USD", "xauusd"),
    Asset("MU", "Micron Technology", "mu.us"),
    Asset("NVDA", "NVIDIA", "nvda.us"),
    Asset("PLTR", "Palantir", "pltr.us"),
    Asset("MSTR", "MicroStrategy", "mstr.us"),
    Asset("GOOGL", "Alphabet (Class A)", "googl.us"),
    Asset("BABA", "Alibaba", "baba.us"),
    Asset("COIN", "Coinbase", "coin.us"),
    Asset("HOOD", "Robinhood", "hood.us"),
    Asset("MP", "MP Materials", "mp.us"),
    Asset("TSLA", "Tesla", "tsla.us"),
    Asset("PSTG", "Pure Storage", "pstg.us"),
    Asset("FSLR", "First Solar", "fslr.us"),
    Asset("SOXL", "Direxion Daily Semiconductor Bull 3X", "soxl.us"),
)

# Symbols with a candle chart; history is fetched one symbol per request
HISTORY_SYMBOLS: tuple[str, ...] = (
    "MU",
    "NVDA",
    "PLTR",
    "MSTR",
    "GOOGL",
    "BABA",
    "COIN",
    "HOOD",
    "MP",
    "TSLA",
    "PSTG",
    "XAUUSD",
)

_BY_SYMBOL: dict[str, Asset] = {asset.symbol: asset for asset in QUOTE_ASSETS}


def get_history_asset(symbol: str) -> Asset:
    """Look up a chartable asset by display symbol (case-insensitive).

    Raises:
        UnknownSymbolError: If the symbol has no candle history configured.
    """
    key = symbol.upper()
    if key not in HISTORY_SYMBOLS:
        raise UnknownSymbolError(f"Unknown symbol: {key}")
    return _BY_SYMBOL[key]
