"""
FastAPI application entry point for the SolarEdge energy proxy.

The lifespan loads ProxySettings (a missing or invalid variable raises
ConfigError and the app never starts serving), builds the telemetry client,
notifier, cache and daily check gate once, and stores them on ``app.state``
for the dependency providers in ``deps.py``.

If the configured static directory exists it is served under /static and
the root path redirects to the dashboard at /static/index.html.

CHANGELOG:
- 2026-10-17: Serve the static dashboard when STATIC_DIR exists
- 2026-10-14: Register health router
- 2026-10-12: Initial creation

TODO:
- None
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.staticfiles import StaticFiles

from solaredge_proxy import __version__
from solaredge_proxy.api.energy import router as energy_router
from solaredge_proxy.api.health import router as health_router
from solaredge_proxy.cache import TelemetryCache
from solaredge_proxy.config import load_settings
from solaredge_proxy.daily_check import DailyCheckGate
from solaredge_proxy.logging_config import log_config_summary
from solaredge_proxy.notifier import AlertNotifier
from solaredge_proxy.telemetry_client import TelemetryClient

logger = logging.getLogger(__name__)

_STATIC_ROUTE_NAME = "static"

_INDEX_REDIRECT_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <meta http-equiv="refresh" content="0; url=/static/index.html">
</head>
</html>"""


def _mount_static(app: FastAPI, static_dir: str) -> bool:
    """Mount *static_dir* under /static once. Returns True if it is served."""
    if any(getattr(route, "name", None) == _STATIC_ROUTE_NAME for route in app.routes):
        return True
    path = Path(static_dir)
    if not path.is_dir():
        logger.info("Static directory %s not found, dashboard disabled", static_dir)
        return False
    app.mount("/static", StaticFiles(directory=path), name=_STATIC_ROUTE_NAME)
    logger.info("Serving static dashboard from %s", path.resolve())
    return True


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: build components at startup, log shutdown.

    Raises:
        ConfigError: If required configuration is missing.
    """
    settings = load_settings()
    log_config_summary(settings)
    app.state.settings = settings

    client = TelemetryClient(settings)
    notifier = AlertNotifier(settings)
    app.state.cache = TelemetryCache(
        client, freshness_window_s=settings.freshness_window_s
    )
    app.state.gate = DailyCheckGate(notifier, message=settings.alert_message)
    app.state.static_enabled = _mount_static(app, settings.static_dir)

    logger.info("Configuration validated, energy proxy ready")
    yield
    logger.info("Energy proxy shutting down")


app = FastAPI(
    title="SolarEdge Energy Proxy",
    description="Cached SolarEdge energy telemetry with a daily midday production check.",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(health_router)
app.include_router(energy_router)


@app.get("/", response_model=None)
async def root(request: Request) -> HTMLResponse | dict:
    """Redirect to the dashboard, or report status when none is served."""
    if getattr(request.app.state, "static_enabled", False):
        return HTMLResponse(_INDEX_REDIRECT_HTML)
    return {"status": "ok"}
