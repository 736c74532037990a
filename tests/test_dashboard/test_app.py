"""End-to-end tests for the wired application.

The real services run against an httpx.MockTransport standing in for the
upstream sites.
"""

import json
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from marketdash import main
from marketdash.config import AppSettings
from marketdash.sources.client import UpstreamClient

from conftest import DISCLOSURES_BODY, HISTORY_BODY, HOLDINGS_BODY, QUOTE_BODY


def _handler(request: httpx.Request) -> httpx.Response:
    url = f"{request.url.scheme}://{request.url.host}{request.url.path}"
    if url == "https://stooq.test/q/l/":
        if request.url.params["s"] == "nvda.us":
            return httpx.Response(200, text=QUOTE_BODY)
        return httpx.Response(200, text="N/D\r\n")
    if url == "https://stooq.test/q/d/l/":
        return httpx.Response(200, text=HISTORY_BODY)
    if url == "https://ark.test/holdings.csv":
        return httpx.Response(200, text=HOLDINGS_BODY)
    if url == "https://github.test/trades.csv":
        return httpx.Response(200, text=DISCLOSURES_BODY)
    if url == "https://vi.test/get_pelosi":
        full = {"last_trade": "2025-01-17", "data": [{"symbol": "NVDA", "transactionType": "Purchase", "amount": "$1,001 - $15,000"}]}
        return httpx.Response(200, json=[{"full_data": json.dumps(full)}])
    return httpx.Response(404)


@pytest.fixture
def mocked_upstream(monkeypatch: pytest.MonkeyPatch) -> None:
    """Route every UpstreamClient built by main through the mock transport."""

    def _client(settings):
        return UpstreamClient(settings, http=httpx.AsyncClient(transport=httpx.MockTransport(_handler)))

    monkeypatch.setattr(main, "UpstreamClient", _client)


class TestWiredApp:
    """Tests for create_app and its lifespan."""

    def test_api_round_trip(self, mock_settings: AppSettings, mocked_upstream: None) -> None:
        app = main.create_app(mock_settings)
        with TestClient(app) as client:
            quotes = client.get("/api/quotes").json()["items"]
            assert quotes[0]["symbol"] == "NDX"
            assert quotes[0]["price"] is None
            nvda = next(q for q in quotes if q["symbol"] == "NVDA")
            assert nvda["price"] == "180.33"

            history = client.get("/api/history", params={"symbol": "NVDA"}).json()
            assert [c["d"] for c in history["candles"]] == ["2026-01-29", "2026-01-30", "2026-02-03"]

            arkk = client.get("/api/arkk").json()
            assert [h["ticker"] for h in arkk["top"]] == ["TSLA", "ROKU", "COIN"]

            pelosi = client.get("/api/pelosi").json()
            assert [p["ticker"] for p in pelosi["positions"]] == ["NVDA"]

            assert client.get("/api/pelosi/snapshot").status_code == 503

    def test_index_page(self, mock_settings: AppSettings, mocked_upstream: None) -> None:
        app = main.create_app(mock_settings)
        with TestClient(app) as client:
            resp = client.get("/")
        assert resp.status_code == 200
        assert "TESLA INC" in resp.text

    def test_monitor_not_started_when_disabled(self, mock_settings: AppSettings, mocked_upstream: None) -> None:
        app = main.create_app(mock_settings)
        with TestClient(app):
            assert app.state.quote_monitor.updated_at is None


class TestRefreshSnapshot:
    """Tests for the snapshot refresh command."""

    @pytest.mark.asyncio
    async def test_refresh_writes_snapshot(
        self,
        mock_settings: AppSettings,
        mocked_upstream: None,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setattr(main, "AppSettings", lambda: mock_settings)
        assert await main.refresh_snapshot() == 0

        saved = json.loads(Path(mock_settings.report.snapshot_path).read_text(encoding="utf-8"))
        assert saved["lastTrade"] == "2025-01-17"
        assert saved["trades"][0]["symbol"] == "NVDA"

    @pytest.mark.asyncio
    async def test_refresh_failure_exit_code(
        self,
        mock_settings: AppSettings,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _client(settings):
            transport = httpx.MockTransport(lambda request: httpx.Response(403))
            return UpstreamClient(settings, http=httpx.AsyncClient(transport=transport))

        monkeypatch.setattr(main, "UpstreamClient", _client)
        monkeypatch.setattr(main, "AppSettings", lambda: mock_settings)
        assert await main.refresh_snapshot() == 1
