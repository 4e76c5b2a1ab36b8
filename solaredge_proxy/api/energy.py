"""
GET /api/energy endpoint serving today's normalized energy series.

Each request goes through the TelemetryCache (refreshing from SolarEdge if
the cached series is older than the freshness window) and then through the
DailyCheckGate, which may send the midday zero-production alert. Upstream
and notifier failures are returned as HTTP 502.

CHANGELOG:
- 2026-10-12: Initial creation

TODO:
- None
"""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from solaredge_proxy.api.deps import get_cache, get_gate, get_now
from solaredge_proxy.cache import TelemetryCache
from solaredge_proxy.daily_check import DailyCheckGate
from solaredge_proxy.errors import DecodeError, TransportError
from solaredge_proxy.models import EnergyResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["energy"])


@router.get("/energy", response_model=EnergyResponse)
async def energy(
    cache: Annotated[TelemetryCache, Depends(get_cache)],
    gate: Annotated[DailyCheckGate, Depends(get_gate)],
    now: Annotated[datetime, Depends(get_now)],
) -> EnergyResponse:
    """Return today's energy series with ISO 8601 sample dates.

    Raises:
        HTTPException: 502 if the SolarEdge fetch or the alert send failed.
    """
    try:
        series = await cache.get(now)
        await gate.maybe_check(now, series)
    except TransportError as exc:
        logger.warning("Energy request failed (transport): %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc
    except DecodeError as exc:
        logger.warning("Energy request failed (decode): %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return EnergyResponse(energy=series)
