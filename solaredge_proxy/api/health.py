"""
Health check endpoint for the energy proxy.

GET /health reports liveness plus the time of the last successful SolarEdge
refresh (``null`` before the first one). It reads the cache entry only and
never triggers an upstream fetch, so it is safe for Docker HEALTHCHECK
polling.

CHANGELOG:
- 2026-10-20: Use TelemetryCache.ever_refreshed instead of an epoch check
- 2026-10-18: Report last cache refresh time
- 2026-10-12: Initial creation

TODO:
- None
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from solaredge_proxy.api.deps import get_cache
from solaredge_proxy.cache import TelemetryCache

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(
    cache: Annotated[TelemetryCache, Depends(get_cache)],
) -> dict[str, str | None]:
    """Return service status and the last refresh time.

    Returns:
        dict: ``{"status": "ok", "last_refreshed": <ISO 8601 or null>}``.
    """
    return {
        "status": "ok",
        "last_refreshed": (
            cache.last_refreshed.isoformat() if cache.ever_refreshed else None
        ),
    }
