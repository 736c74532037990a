"""JSON API endpoints for quotes, candle history, ETF holdings and estimated positions."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from marketdash.exceptions import SnapshotError, UnknownSymbolError, UpstreamError

log = structlog.get_logger(__name__)

router = APIRouter()


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"ok": False, "error": message}, status_code=status_code)


@router.get("/quotes")
async def get_quotes(request: Request) -> JSONResponse:
    """Latest quote per catalog instrument. Failed instruments carry a null price."""
    quote_monitor = request.app.state.quote_monitor
    quotes = await quote_monitor.get_quotes()
    return JSONResponse(content={"ok": True, "items": [q.to_dict() for q in quotes]})


@router.get("/history")
async def get_history(
    request: Request, symbol: str = "", days: str | None = None
) -> JSONResponse:
    """Daily candles for one symbol, oldest first.

    Query params:
        symbol: Catalog symbol (case-insensitive), e.g. "NVDA".
        days: Window length, clamped to the configured bounds (default 120).
    """
    history_service = request.app.state.history_service
    try:
        candles = await history_service.get_candles(symbol, days)
    except UnknownSymbolError as e:
        return _error(str(e), 400)
    except UpstreamError as e:
        log.error("history_error", symbol=symbol, error=str(e))
        return _error(str(e), 502)

    return JSONResponse(
        content={
            "ok": True,
            "symbol": symbol.upper(),
            "candles": [c.to_dict() for c in candles],
        }
    )


@router.get("/arkk")
async def get_arkk_holdings(request: Request) -> JSONResponse:
    """Top ARKK holdings by weight with total count and as-of date."""
    holdings_service = request.app.state.holdings_service
    try:
        snapshot = await holdings_service.get_snapshot()
    except UpstreamError as e:
        log.error("holdings_error", error=str(e))
        return _error(str(e), 502)

    return JSONResponse(content={"ok": True, **snapshot.to_dict()})


@router.get("/pelosi")
async def get_pelosi_estimate(request: Request) -> JSONResponse:
    """Estimated net positions aggregated from the disclosures CSV."""
    disclosure_service = request.app.state.disclosure_service
    try:
        report = await disclosure_service.estimate_from_csv()
    except UpstreamError as e:
        log.error("disclosures_error", path="csv", error=str(e))
        return _error(str(e), 502)

    return JSONResponse(content={"ok": True, **report.to_dict()})


@router.get("/pelosi/snapshot")
async def get_pelosi_snapshot_estimate(request: Request) -> JSONResponse:
    """Estimated net positions aggregated from the cached snapshot file."""
    disclosure_service = request.app.state.disclosure_service
    try:
        report = await disclosure_service.estimate_from_snapshot()
    except SnapshotError as e:
        log.warning("disclosures_error", path="snapshot", error=str(e))
        return _error(str(e), 503)

    return JSONResponse(content={"ok": True, **report.to_dict()})
