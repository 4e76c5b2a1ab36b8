"""
Pushover alert notifier.

Sends a single message through the Pushover messages API. One POST per call,
no retries and no delivery confirmation beyond a 2xx HTTP status.

CHANGELOG:
- 2026-10-12: Initial creation

TODO:
- None
"""

from __future__ import annotations

import logging

import httpx

from solaredge_proxy.config import ProxySettings
from solaredge_proxy.errors import TransportError

logger = logging.getLogger(__name__)


class AlertNotifier:
    """Pushover notifier with fixed credentials.

    Args:
        settings: Proxy settings providing ``pushover_token``,
            ``pushover_user``, ``pushover_base_url`` and ``http_timeout_s``.
    """

    def __init__(self, settings: ProxySettings) -> None:
        self._base_url = settings.pushover_base_url
        self._token = settings.pushover_token
        self._user = settings.pushover_user
        self._timeout_s = settings.http_timeout_s

    @property
    def messages_url(self) -> str:
        return f"{self._base_url}/1/messages.json"

    async def send(self, message: str) -> None:
        """POST *message* to Pushover as form fields ``token``, ``user``, ``message``.

        Raises:
            TransportError: On connection failure, timeout, or a non-2xx
                response.
        """
        data = {"token": self._token, "user": self._user, "message": message}

        try:
            async with httpx.AsyncClient(timeout=self._timeout_s, verify=True) as client:
                response = await client.post(self.messages_url, data=data)
        except httpx.RequestError as exc:
            logger.warning("Alert send failed (network error): %s", type(exc).__name__)
            raise TransportError(
                f"Pushover request failed: {type(exc).__name__}"
            ) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("Alert send failed (HTTP %d)", response.status_code)
            raise TransportError(f"Pushover returned HTTP {response.status_code}")

        logger.info("Alert sent: %s", message)
