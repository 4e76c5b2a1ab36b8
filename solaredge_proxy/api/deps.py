"""
FastAPI dependency injection providers.

Components are built once in the application lifespan and stored on
``app.state``; these providers hand them to route handlers so tests can
swap them via ``app.dependency_overrides``.

CHANGELOG:
- 2026-10-12: Initial creation
"""

from datetime import UTC, datetime

from fastapi import Request

from solaredge_proxy.cache import TelemetryCache
from solaredge_proxy.daily_check import DailyCheckGate


def get_cache(request: Request) -> TelemetryCache:
    """Return the process-wide TelemetryCache."""
    return request.app.state.cache


def get_gate(request: Request) -> DailyCheckGate:
    """Return the process-wide DailyCheckGate."""
    return request.app.state.gate


def get_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(tz=UTC)
