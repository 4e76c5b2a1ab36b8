"""
Shared test fixtures for the energy proxy tests.

All proxy env vars are cleaned before each test and the working directory is
moved to a temp dir, so no developer .env file or static directory leaks in.
Fixtures then set only the vars a test needs.

CHANGELOG:
- 2026-10-12: Initial creation
"""

from __future__ import annotations

from collections.abc import Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from solaredge_proxy.models import EnergySample, EnergySeries

_ALL_PROXY_ENV_VARS = (
    "SITE_ID",
    "API_KEY",
    "PUSHOVER_USER",
    "PUSHOVER_TOKEN",
    "MONITORING_BASE_URL",
    "PUSHOVER_BASE_URL",
    "FRESHNESS_WINDOW_S",
    "HTTP_TIMEOUT_S",
    "ALERT_MESSAGE",
    "STATIC_DIR",
)


@pytest.fixture(autouse=True)
def _clean_proxy_env(monkeypatch: pytest.MonkeyPatch, tmp_path: str) -> None:
    """Remove all proxy env vars and isolate from .env files before each test."""
    for var in _ALL_PROXY_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def env_vars_required(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set only the required environment variables."""
    env = {
        "SITE_ID": "123456",
        "API_KEY": "test-api-key",
        "PUSHOVER_USER": "test-pushover-user",
        "PUSHOVER_TOKEN": "test-pushover-token",
    }
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return env


@pytest.fixture()
def settings(env_vars_required: dict[str, str]):
    """A ProxySettings instance built from the required env vars."""
    from solaredge_proxy.config import ProxySettings

    return ProxySettings()


@pytest.fixture()
def client(env_vars_required: dict[str, str]) -> Generator[TestClient, None, None]:
    """FastAPI TestClient with lifespan events triggered."""
    from solaredge_proxy.api.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def make_series(
    *samples: tuple[str, float | None],
    time_unit: str = "QUARTER_OF_AN_HOUR",
    unit: str = "Wh",
) -> EnergySeries:
    """Build an EnergySeries from ``(date, value)`` pairs."""
    return EnergySeries(
        time_unit=time_unit,
        unit=unit,
        values=[EnergySample(date=d, value=v) for d, v in samples],
    )


@pytest.fixture()
def raw_series() -> EnergySeries:
    """A small upstream (un-normalized) series around midday."""
    return make_series(
        ("2024-05-01 11:45:00", 812.0),
        ("2024-05-01 12:00:00", 905.5),
        ("2024-05-01 12:15:00", None),
    )


@pytest.fixture()
def mock_notifier() -> AsyncMock:
    """A mock AlertNotifier whose send() succeeds."""
    notifier = AsyncMock()
    notifier.send = AsyncMock(return_value=None)
    return notifier
