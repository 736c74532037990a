"""Shared test fixtures for the market dashboard."""

from pathlib import Path

import pytest

from marketdash.config import (
    AppSettings,
    CacheSettings,
    DashboardSettings,
    ReportSettings,
    UpstreamSettings,
)

# ---------------------------------------------------------------------------
# Sample upstream bodies (shapes match the live feeds)
# ---------------------------------------------------------------------------

QUOTE_BODY = "NVDA.US,20260203,220018,186.24,186.27,176.23,180.33,203331497,\r\n"

HISTORY_BODY = (
    "Date,Open,High,Low,Close,Volume\n"
    "2026-01-29,100,110,95,105,1000\n"
    "2026-01-30,105,112,101,108,1200\n"
    "2026-02-02,108,N/D,100,104,900\n"
    "2026-02-03,104,109,103,107,1100\n"
)

HOLDINGS_BODY = (
    "date,fund,company,ticker,cusip,shares,market value ($),weight (%)\n"
    '02/03/2026,ARKK,"COINBASE GLOBAL INC -CLASS A",COIN,19260Q107,"1,234,567","$301,234,567.89",5.00%\n'
    '02/03/2026,ARKK,TESLA INC,TSLA,88160R101,"2,000,000","$800,000,000.00",20.00%\n'
    '02/03/2026,ARKK,"ROKU INC",ROKU,77543R102,"900,000","$75,000,000.00",10.00%\n'
    "junk,row\n"
)

DISCLOSURES_BODY = (
    "transaction_date,ticker,asset_description,type,amount,comment\n"
    "2024-01-05,NVDA,NVIDIA Corporation,Purchase,\"$250,001 - $500,000\",Call options\n"
    "2024-02-10,NVDA,NVIDIA Corporation,Sale (Partial),\"$100,001 - $250,000\",\n"
    "2024-03-01,AAPL,Apple Inc. Common,Purchase,\"$1,000,001 - $5,000,000\",\n"
    "2024-03-15,AAPL,Apple Inc. Common,Sale (Full),\"$1,000,001 - $5,000,000\",\n"
    "2024-04-01,MSFT,Microsoft Corporation,Exchange,\"$15,001 - $50,000\",\n"
)


@pytest.fixture
def upstream_settings() -> UpstreamSettings:
    """Upstream settings with test URLs and no retry delay."""
    return UpstreamSettings(
        stooq_quote_url="https://stooq.test/q/l/",
        stooq_history_url="https://stooq.test/q/d/l/",
        arkk_holdings_url="https://ark.test/holdings.csv",
        disclosures_csv_url="https://github.test/trades.csv",
        snapshot_api_url="https://vi.test/get_pelosi",
        snapshot_page_url="https://vi.test/tracker",
        max_retries=2,
        retry_base_delay=0.0,
    )


@pytest.fixture
def cache_settings() -> CacheSettings:
    return CacheSettings()


@pytest.fixture
def report_settings(tmp_path: Path) -> ReportSettings:
    """Report settings with the snapshot file under a temp directory."""
    return ReportSettings(snapshot_path=str(tmp_path / "snapshot.json"))


@pytest.fixture
def mock_settings(
    upstream_settings: UpstreamSettings,
    cache_settings: CacheSettings,
    report_settings: ReportSettings,
) -> AppSettings:
    """Return AppSettings with test defaults (monitor disabled)."""
    return AppSettings(
        log_level="DEBUG",
        upstream=upstream_settings,
        cache=cache_settings,
        report=report_settings,
        dashboard=DashboardSettings(monitor_enabled=False),
    )
