"""Configuration system using pydantic-settings with environment variable loading."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class UpstreamSettings(BaseSettings):
    """Third-party data source endpoints and HTTP behaviour."""

    model_config = SettingsConfigDict(env_prefix="UPSTREAM_")

    stooq_quote_url: str = "https://stooq.com/q/l/"
    stooq_history_url: str = "https://stooq.com/q/d/l/"
    arkk_holdings_url: str = (
        "https://assets.ark-funds.com/fund-documents/funds-etf-csv/"
        "ARK_INNOVATION_ETF_ARKK_HOLDINGS.csv"
    )
    disclosures_csv_url: str = (
        "https://raw.githubusercontent.com/letsgolob3/pelosi_trades/main/trades.csv"
    )
    snapshot_api_url: str = "https://valueinvesting.io/get_pelosi"
    snapshot_page_url: str = "https://valueinvesting.io/nancy-pelosi-stock-trades-tracker"
    user_agent: str = "Mozilla/5.0 (compatible; PortfolioGrow/1.0)"
    timeout_seconds: float = 10.0
    max_retries: int = 3
    retry_base_delay: float = 0.5


class CacheSettings(BaseSettings):
    """Per-feed time-to-live for cached upstream bodies, in seconds."""

    model_config = SettingsConfigDict(env_prefix="CACHE_")

    quotes_ttl: float = 20.0
    history_ttl: float = 60.0
    holdings_ttl: float = 600.0  # 10 min
    disclosures_ttl: float = 1800.0  # 30 min


class ReportSettings(BaseSettings):
    """Truncation limits and report inputs.

    All fields configurable via REPORT_ environment variable prefix.
    """

    model_config = SettingsConfigDict(env_prefix="REPORT_")

    holdings_top_n: int = 15
    positions_top_n: int = 20
    history_default_days: int = 120
    history_min_days: int = 30
    history_max_days: int = 400
    history_padding_days: int = 45  # weekends/holidays around the window
    snapshot_path: str = "data/pelosi_valueinvesting.json"


class DashboardSettings(BaseSettings):
    """Dashboard server configuration."""

    model_config = SettingsConfigDict(env_prefix="DASHBOARD_")

    host: str = "0.0.0.0"
    port: int = 8080
    monitor_enabled: bool = True
    quote_poll_interval: float = 20.0  # seconds between quote refreshes


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    log_format: str = "console"  # "console" or "json"
    upstream: UpstreamSettings = UpstreamSettings()
    cache: CacheSettings = CacheSettings()
    report: ReportSettings = ReportSettings()
    dashboard: DashboardSettings = DashboardSettings()
