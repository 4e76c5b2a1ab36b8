"""
Unit tests for the SolarEdge telemetry client.

Tests verify:
- One GET to /site/{site_id}/energy with the day window and quarter-hour unit.
- Successful bodies are returned verbatim as an EnergySeries.
- Network errors, timeouts, and non-2xx statuses raise TransportError.
- Non-JSON and wrongly shaped bodies raise DecodeError.

CHANGELOG:
- 2026-10-12: Initial creation
"""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from solaredge_proxy.errors import DecodeError, TransportError
from solaredge_proxy.telemetry_client import TelemetryClient

DAY = date(2024, 5, 1)

UPSTREAM_BODY = {
    "energy": {
        "timeUnit": "QUARTER_OF_AN_HOUR",
        "unit": "Wh",
        "values": [
            {"date": "2024-05-01 11:45:00", "value": 812.0},
            {"date": "2024-05-01 12:00:00", "value": 0.0},
            {"date": "2024-05-01 12:15:00", "value": None},
        ],
    }
}


def _mock_http_client(
    status_code: int = 200,
    body: object = None,
    json_side_effect: Exception | None = None,
    get_side_effect: Exception | None = None,
) -> AsyncMock:
    """Create a mock httpx.AsyncClient usable as an async context manager."""
    mock_response = MagicMock()
    mock_response.status_code = status_code
    if json_side_effect is not None:
        mock_response.json = MagicMock(side_effect=json_side_effect)
    else:
        mock_response.json = MagicMock(return_value=body)

    mock_client = AsyncMock()
    if get_side_effect is not None:
        mock_client.get = AsyncMock(side_effect=get_side_effect)
    else:
        mock_client.get = AsyncMock(return_value=mock_response)
    mock_client.__aenter__ = AsyncMock(return_value=mock_client)
    mock_client.__aexit__ = AsyncMock(return_value=False)
    return mock_client


class TestRequest:
    """fetch_today issues one correctly parameterised GET."""

    @pytest.mark.asyncio
    async def test_gets_site_energy_for_single_day(self, settings) -> None:
        mock_client = _mock_http_client(body=UPSTREAM_BODY)
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=mock_client,
        ):
            await telemetry.fetch_today(DAY)

        mock_client.get.assert_awaited_once()
        call_args = mock_client.get.call_args
        assert (
            call_args[0][0]
            == "https://monitoringapi.solaredge.com/site/123456/energy"
        )
        assert call_args[1]["params"] == {
            "timeUnit": "QUARTER_OF_AN_HOUR",
            "endDate": "2024-05-01",
            "startDate": "2024-05-01",
            "api_key": "test-api-key",
        }

    @pytest.mark.asyncio
    async def test_uses_configured_timeout_and_tls_verification(self, settings) -> None:
        mock_client = _mock_http_client(body=UPSTREAM_BODY)
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=mock_client,
        ) as mock_client_cls:
            await telemetry.fetch_today(DAY)

        mock_client_cls.assert_called_once_with(timeout=10.0, verify=True)


class TestSuccess:
    """A 200 response with the expected shape is returned verbatim."""

    @pytest.mark.asyncio
    async def test_returns_upstream_series_unnormalized(self, settings) -> None:
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=_mock_http_client(body=UPSTREAM_BODY),
        ):
            series = await telemetry.fetch_today(DAY)

        assert series.time_unit == "QUARTER_OF_AN_HOUR"
        assert series.unit == "Wh"
        assert [s.date for s in series.values] == [
            "2024-05-01 11:45:00",
            "2024-05-01 12:00:00",
            "2024-05-01 12:15:00",
        ]
        assert [s.value for s in series.values] == [812.0, 0.0, None]

    @pytest.mark.asyncio
    async def test_missing_value_key_treated_as_null(self, settings) -> None:
        body = {
            "energy": {
                "timeUnit": "QUARTER_OF_AN_HOUR",
                "unit": "Wh",
                "values": [{"date": "2024-05-01 23:45:00"}],
            }
        }
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=_mock_http_client(body=body),
        ):
            series = await telemetry.fetch_today(DAY)

        assert series.values[0].value is None


class TestTransportErrors:
    """Network failures and non-2xx statuses raise TransportError."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "exc",
        [
            httpx.ConnectError("connection refused"),
            httpx.ReadTimeout("read timed out"),
        ],
    )
    async def test_network_error_raises_transport_error(
        self, settings, exc: Exception
    ) -> None:
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=_mock_http_client(get_side_effect=exc),
        ):
            with pytest.raises(TransportError):
                await telemetry.fetch_today(DAY)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [403, 429, 500, 503])
    async def test_non_2xx_raises_transport_error(
        self, settings, status_code: int
    ) -> None:
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=_mock_http_client(status_code=status_code, body={}),
        ):
            with pytest.raises(TransportError, match=str(status_code)):
                await telemetry.fetch_today(DAY)

    @pytest.mark.asyncio
    async def test_api_key_not_in_error_message(self, settings) -> None:
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=_mock_http_client(get_side_effect=httpx.ConnectError("boom")),
        ):
            with pytest.raises(TransportError) as exc_info:
                await telemetry.fetch_today(DAY)

        assert "test-api-key" not in str(exc_info.value)


class TestDecodeErrors:
    """Malformed bodies raise DecodeError."""

    @pytest.mark.asyncio
    async def test_non_json_body_raises_decode_error(self, settings) -> None:
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=_mock_http_client(json_side_effect=ValueError("not json")),
        ):
            with pytest.raises(DecodeError):
                await telemetry.fetch_today(DAY)

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"energy": {"unit": "Wh", "values": []}},
            {"energy": {"timeUnit": "DAY", "unit": "Wh", "values": [{"value": 1.0}]}},
            {"energy": {"timeUnit": "DAY", "unit": "Wh", "values": "nope"}},
            [],
        ],
    )
    async def test_unexpected_shape_raises_decode_error(
        self, settings, body: object
    ) -> None:
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=_mock_http_client(body=body),
        ):
            with pytest.raises(DecodeError):
                await telemetry.fetch_today(DAY)

    @pytest.mark.asyncio
    async def test_undecodable_body_raises_decode_error(self, settings) -> None:
        """A body that fails content decoding is a decode failure, not transport."""
        telemetry = TelemetryClient(settings)

        with patch(
            "solaredge_proxy.telemetry_client.httpx.AsyncClient",
            return_value=_mock_http_client(
                get_side_effect=httpx.DecodingError("invalid gzip stream")
            ),
        ):
            with pytest.raises(DecodeError) as exc_info:
                await telemetry.fetch_today(DAY)

        assert isinstance(exc_info.value.__cause__, httpx.DecodingError)
