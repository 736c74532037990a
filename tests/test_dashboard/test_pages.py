"""Tests for the server-rendered dashboard pages and template filters."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from marketdash.dashboard.app import _format_decimal, _format_pct, _format_usd, create_dashboard_app
from marketdash.exceptions import UnknownSymbolError, UpstreamError
from marketdash.ingest.positions import DISCLAIMER, LOGIC
from marketdash.models import Candle, EstimatedPosition, Holding, HoldingsSnapshot, PositionReport, Quote


@pytest.fixture
def state() -> MagicMock:
    s = MagicMock()
    s.quote_monitor.get_quotes = AsyncMock(
        return_value=[
            Quote("NVDA", "NVIDIA", Decimal("180.33"), Decimal("1.5"), "USD", "—", None),
            Quote("NDX", "Nasdaq 100", None, None, "USD", "—", None),
        ]
    )
    s.holdings_service.get_snapshot = AsyncMock(
        return_value=HoldingsSnapshot(
            as_of="02/03/2026",
            top=[Holding("02/03/2026", "ARKK", "TESLA INC", "TSLA", Decimal("2000000"), Decimal("800000000"), Decimal("20"))],
            count=1,
            source="https://ark.test/holdings.csv",
        )
    )
    s.disclosure_service.estimate_from_csv = AsyncMock(
        return_value=PositionReport(
            positions=[EstimatedPosition("NVDA", "NVIDIA Corporation", Decimal("200000.0"), "2024-02-10", ["Options: Call"])],
            source="https://github.test/trades.csv",
            disclaimer=DISCLAIMER,
            logic=LOGIC,
        )
    )
    s.history_service.get_candles = AsyncMock(
        return_value=[
            Candle(date(2026, 2, 2), Decimal("100"), Decimal("110"), Decimal("95"), Decimal("105")),
            Candle(date(2026, 2, 3), Decimal("105"), Decimal("112"), Decimal("101"), Decimal("104")),
        ]
    )
    return s


@pytest.fixture
def client(state: MagicMock) -> TestClient:
    app = create_dashboard_app()
    app.state.quote_monitor = state.quote_monitor
    app.state.history_service = state.history_service
    app.state.holdings_service = state.holdings_service
    app.state.disclosure_service = state.disclosure_service
    return TestClient(app)


class TestIndexPage:
    """Tests for the main dashboard page."""

    def test_renders_all_panels(self, client: TestClient) -> None:
        resp = client.get("/")
        assert resp.status_code == 200
        html = resp.text
        assert "180.33" in html
        assert "+1.50%" in html
        assert '<a href="/candles/NVDA">NVDA</a>' in html
        assert "TESLA INC" in html
        assert "20.00%" in html
        assert "NVIDIA Corporation" in html
        assert "$+200,000" in html
        assert "Options: Call" in html
        assert DISCLAIMER in html

    def test_absent_quote_renders_dash(self, client: TestClient) -> None:
        html = client.get("/").text
        assert "Nasdaq 100" in html
        assert '<a href="/candles/NDX">' not in html
        assert "0.00" not in html.split("Nasdaq 100", 1)[1].split("</tr>", 1)[0]

    def test_failed_panel_does_not_break_page(self, client: TestClient, state: MagicMock) -> None:
        state.holdings_service.get_snapshot.side_effect = UpstreamError("Upstream error: 403 Forbidden", 403)
        resp = client.get("/")
        assert resp.status_code == 200
        assert "Upstream error: 403 Forbidden" in resp.text
        assert "NVIDIA Corporation" in resp.text


class TestCandlesPage:
    """Tests for the candle table page."""

    def test_newest_first(self, client: TestClient) -> None:
        resp = client.get("/candles/nvda")
        assert resp.status_code == 200
        html = resp.text
        assert html.index("2026-02-03") < html.index("2026-02-02")
        assert "NVDA" in html

    def test_unknown_symbol_is_404(self, client: TestClient, state: MagicMock) -> None:
        state.history_service.get_candles.side_effect = UnknownSymbolError("Unknown symbol: ZZZ")
        resp = client.get("/candles/zzz")
        assert resp.status_code == 404
        assert "Unknown symbol: ZZZ" in resp.text

    def test_upstream_failure_is_502(self, client: TestClient, state: MagicMock) -> None:
        state.history_service.get_candles.side_effect = UpstreamError("Upstream error: 500", 500)
        assert client.get("/candles/NVDA").status_code == 502


class TestFilters:
    """Tests for the Jinja2 display filters."""

    def test_format_decimal(self) -> None:
        assert _format_decimal(Decimal("1234567.891")) == "1,234,567.89"
        assert _format_decimal(Decimal("2000000"), 0) == "2,000,000"
        assert _format_decimal(None) == "—"

    def test_format_pct(self) -> None:
        assert _format_pct(Decimal("1.234")) == "+1.23%"
        assert _format_pct(Decimal("-3.175")) == "-3.18%"
        assert _format_pct(Decimal("0")) == "+0.00%"
        assert _format_pct(None) == "—"

    def test_format_usd(self) -> None:
        assert _format_usd(Decimal("375000.5")) == "$+375,001"
        assert _format_usd(Decimal("-1250000")) == "$-1,250,000"
        assert _format_usd(None) == "—"
