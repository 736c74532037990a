"""Market dashboard: quotes, candles, ETF holdings and disclosure-based position estimates."""

__version__ = "0.1.0"
