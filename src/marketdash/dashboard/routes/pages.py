"""Page routes serving the server-rendered dashboard HTML."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from marketdash.exceptions import MarketDashError, UnknownSymbolError
from marketdash.sources.assets import HISTORY_SYMBOLS

log = structlog.get_logger(__name__)

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def dashboard_index(request: Request) -> HTMLResponse:
    """Main dashboard page. Each panel renders its own error if its feed fails."""
    templates: Jinja2Templates = request.app.state.templates
    state = request.app.state

    quotes = await state.quote_monitor.get_quotes()

    holdings = None
    holdings_error = None
    try:
        holdings = await state.holdings_service.get_snapshot()
    except MarketDashError as e:
        log.warning("index_holdings_unavailable", error=str(e))
        holdings_error = str(e)

    report = None
    report_error = None
    try:
        report = await state.disclosure_service.estimate_from_csv()
    except MarketDashError as e:
        log.warning("index_positions_unavailable", error=str(e))
        report_error = str(e)

    context = {
        "quotes": quotes,
        "history_symbols": HISTORY_SYMBOLS,
        "holdings": holdings,
        "holdings_error": holdings_error,
        "report": report,
        "report_error": report_error,
    }
    return templates.TemplateResponse(request, "index.html", context)


@router.get("/candles/{symbol}", response_class=HTMLResponse)
async def candles_page(request: Request, symbol: str, days: str | None = None) -> HTMLResponse:
    """Candle table for one symbol."""
    templates: Jinja2Templates = request.app.state.templates
    history_service = request.app.state.history_service

    candles = []
    error = None
    status_code = 200
    try:
        candles = await history_service.get_candles(symbol, days)
    except UnknownSymbolError as e:
        error = str(e)
        status_code = 404
    except MarketDashError as e:
        log.warning("candles_unavailable", symbol=symbol, error=str(e))
        error = str(e)
        status_code = 502

    context = {
        "symbol": symbol.upper(),
        "candles": list(reversed(candles)),
        "history_symbols": HISTORY_SYMBOLS,
        "error": error,
    }
    return templates.TemplateResponse(
        request, "candles.html", context, status_code=status_code
    )
