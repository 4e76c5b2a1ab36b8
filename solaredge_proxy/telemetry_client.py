"""
HTTPS client for the SolarEdge monitoring API energy endpoint.

Fetches a single calendar day of energy production at quarter-hour
resolution for the configured site. Each call issues exactly one GET request;
there are no retries here, the next incoming request retries naturally.

Operations:
- fetch_today(day): GET /site/{site_id}/energy for ``day`` and return the
  upstream EnergySeries verbatim (dates are not normalized here).

CHANGELOG:
- 2026-10-12: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging
from datetime import date

import httpx
from pydantic import ValidationError

from solaredge_proxy.config import ProxySettings
from solaredge_proxy.errors import DecodeError, TransportError
from solaredge_proxy.models import EnergyResponse, EnergySeries

logger = logging.getLogger(__name__)

TIME_UNIT = "QUARTER_OF_AN_HOUR"
"""Upstream granularity requested on every fetch."""


class TelemetryClient:
    """Client for the SolarEdge site energy endpoint.

    Args:
        settings: Proxy settings providing ``site_id``, ``api_key``,
            ``monitoring_base_url`` and ``http_timeout_s``.

    Usage::

        client = TelemetryClient(settings)
        series = await client.fetch_today(date(2024, 5, 1))
    """

    def __init__(self, settings: ProxySettings) -> None:
        self._base_url = settings.monitoring_base_url
        self._site_id = settings.site_id
        self._api_key = settings.api_key
        self._timeout_s = settings.http_timeout_s

    @property
    def energy_url(self) -> str:
        """Full URL of the site energy endpoint (without query string)."""
        return f"{self._base_url}/site/{self._site_id}/energy"

    async def fetch_today(self, day: date) -> EnergySeries:
        """Fetch the energy series for a single calendar day.

        Both ``startDate`` and ``endDate`` are set to *day*.

        Args:
            day: The calendar day to fetch.

        Returns:
            EnergySeries: The upstream series with dates as delivered.

        Raises:
            TransportError: On connection failure, timeout, or a non-2xx
                response.
            DecodeError: If the body is not JSON or does not match the
                expected ``{"energy": {...}}`` shape.
        """
        params = {
            "timeUnit": TIME_UNIT,
            "endDate": day.isoformat(),
            "startDate": day.isoformat(),
            "api_key": self._api_key,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout_s, verify=True) as client:
                response = await client.get(self.energy_url, params=params)
        except httpx.DecodingError as exc:
            logger.warning("Energy fetch failed (undecodable body): %s", exc)
            raise DecodeError("SolarEdge response body could not be decoded") from exc
        except httpx.RequestError as exc:
            logger.warning("Energy fetch failed (network error): %s", type(exc).__name__)
            raise TransportError(
                f"SolarEdge request failed: {type(exc).__name__}"
            ) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("Energy fetch failed (HTTP %d)", response.status_code)
            raise TransportError(
                f"SolarEdge returned HTTP {response.status_code}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodeError("SolarEdge response body is not valid JSON") from exc

        try:
            energy_response = EnergyResponse.model_validate(payload)
        except ValidationError as exc:
            raise DecodeError(
                f"SolarEdge response has unexpected shape: {exc.error_count()} error(s)"
            ) from exc

        logger.info(
            "Fetched %d energy samples for site %s on %s",
            len(energy_response.energy.values),
            self._site_id,
            day.isoformat(),
        )
        return energy_response.energy
