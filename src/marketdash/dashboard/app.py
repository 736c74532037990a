"""FastAPI dashboard application factory with Jinja2 templates."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates

from marketdash.dashboard.routes import api, pages

TEMPLATES_DIR = Path(__file__).parent / "templates"

MISSING = "—"


def _format_decimal(value: Any, places: int = 2) -> str:
    """Format a Decimal with thousands separators; absent values render as a dash."""
    if value is None:
        return MISSING
    quantum = Decimal(1).scaleb(-places)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):,}"


def _format_pct(value: Any) -> str:
    """Format a percentage change with an explicit sign (e.g. '+1.25%')."""
    if value is None:
        return MISSING
    rounded = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "+" if rounded >= 0 else ""
    return f"{sign}{rounded}%"


def _format_usd(value: Any) -> str:
    """Format a signed whole-dollar notional (e.g. '$+375,001')."""
    if value is None:
        return MISSING
    rounded = Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "+" if rounded >= 0 else ""
    return f"${sign}{rounded:,}"


def create_dashboard_app(lifespan: Any = None) -> FastAPI:
    """Create and configure the FastAPI dashboard application.

    Args:
        lifespan: Optional async context manager for application lifespan events.
                  Used by main.py to wire services onto app.state.

    Returns:
        Configured FastAPI application with templates and routes.
    """
    app = FastAPI(
        title="Market Dashboard",
        lifespan=lifespan,
    )

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.filters["format_decimal"] = _format_decimal
    templates.env.filters["format_pct"] = _format_pct
    templates.env.filters["format_usd"] = _format_usd
    app.state.templates = templates

    app.include_router(pages.router)
    app.include_router(api.router, prefix="/api")

    return app
