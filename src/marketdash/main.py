"""Entry points for the market dashboard.

Wires all components together and serves the FastAPI dashboard with uvicorn.
The quote monitor and the dashboard share a single asyncio event loop via
FastAPI's lifespan context manager.

Component wiring order (in _build_components):
1. AppSettings (configuration)
2. Logging setup
3. UpstreamClient (shared httpx connection pool)
4. ResponseCache (per-feed TTL body cache)
5. SnapshotStore (cached disclosure snapshot file)
6. QuoteService, HistoryService, HoldingsService, DisclosureService
7. QuoteMonitor (background quote polling)
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI

from marketdash.config import AppSettings
from marketdash.exceptions import MarketDashError
from marketdash.logging import get_logger, setup_logging
from marketdash.services.cache import ResponseCache
from marketdash.services.disclosures import DisclosureService
from marketdash.services.history import HistoryService
from marketdash.services.holdings import HoldingsService
from marketdash.services.quote_monitor import QuoteMonitor
from marketdash.services.quotes import QuoteService
from marketdash.sources.client import UpstreamClient
from marketdash.sources.snapshot import SnapshotStore


def _build_components(settings: AppSettings) -> dict[str, Any]:
    """Build all dashboard components from settings.

    Note: Does NOT start the quote monitor -- that happens in the lifespan.

    Args:
        settings: Application-wide settings.

    Returns:
        Dict mapping component names to instances.
    """
    client = UpstreamClient(settings.upstream)
    cache = ResponseCache()
    store = SnapshotStore(settings.report.snapshot_path)

    quote_service = QuoteService(client, cache, settings.upstream, settings.cache)
    history_service = HistoryService(
        client, cache, settings.upstream, settings.cache, settings.report
    )
    holdings_service = HoldingsService(
        client, cache, settings.upstream, settings.cache, settings.report
    )
    disclosure_service = DisclosureService(
        client, cache, store, settings.upstream, settings.cache, settings.report
    )
    quote_monitor = QuoteMonitor(
        quote_service, poll_interval=settings.dashboard.quote_poll_interval
    )

    return {
        "client": client,
        "cache": cache,
        "snapshot_store": store,
        "quote_service": quote_service,
        "history_service": history_service,
        "holdings_service": holdings_service,
        "disclosure_service": disclosure_service,
        "quote_monitor": quote_monitor,
    }


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage component lifecycle within the FastAPI application.

    On startup: stores services on app.state and starts the quote monitor.
    On shutdown: stops the monitor and closes the upstream client.
    """
    logger = get_logger("marketdash.main")
    settings: AppSettings = app.state.settings
    components = app.state.components

    app.state.quote_monitor = components["quote_monitor"]
    app.state.history_service = components["history_service"]
    app.state.holdings_service = components["holdings_service"]
    app.state.disclosure_service = components["disclosure_service"]

    if settings.dashboard.monitor_enabled:
        await components["quote_monitor"].start()

    logger.info("lifespan_started", monitor=settings.dashboard.monitor_enabled)

    yield

    await components["quote_monitor"].stop()
    await components["client"].close()

    logger.info("market_dashboard_stopped")


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Build a fully wired dashboard app (used by uvicorn and tests)."""
    from marketdash.dashboard.app import create_dashboard_app

    settings = settings or AppSettings()
    app = create_dashboard_app(lifespan=lifespan)
    app.state.settings = settings
    app.state.components = _build_components(settings)
    return app


async def run() -> None:
    """Run the dashboard server until interrupted."""
    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("marketdash.main")

    app = create_app(settings)

    logger.info(
        "starting_dashboard",
        host=settings.dashboard.host,
        port=settings.dashboard.port,
    )

    config = uvicorn.Config(
        app,
        host=settings.dashboard.host,
        port=settings.dashboard.port,
        log_level="warning",  # Suppress uvicorn access logs
    )
    server = uvicorn.Server(config)
    await server.serve()


async def refresh_snapshot() -> int:
    """Fetch the disclosure snapshot once and rewrite the cached file.

    Returns:
        Process exit code (0 on success).
    """
    settings = AppSettings()
    setup_logging(settings.log_level, settings.log_format)
    logger = get_logger("marketdash.main")

    components = _build_components(settings)
    try:
        doc = await components["disclosure_service"].refresh_snapshot()
    except MarketDashError as e:
        logger.error("snapshot_refresh_failed", error=str(e))
        return 1
    finally:
        await components["client"].close()

    logger.info(
        "snapshot_refreshed",
        path=settings.report.snapshot_path,
        trades=len(doc["trades"]),
    )
    return 0


def main() -> None:
    """Synchronous entry point for the dashboard server."""
    asyncio.run(run())


def refresh_snapshot_main() -> None:
    """Synchronous entry point for the snapshot refresh command."""
    raise SystemExit(asyncio.run(refresh_snapshot()))


if __name__ == "__main__":
    main()
