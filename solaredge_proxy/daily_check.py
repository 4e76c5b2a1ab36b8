"""
Once-per-day midday production check.

A two-state gate evaluated on every /api/energy request against the UTC hour
of the request time:

- PENDING -> CHECKED on the first request during hour 12. On that transition
  the 12:00 sample is inspected and a Pushover alert is sent if its value is
  exactly 0.0.
- CHECKED -> PENDING on the first request during hour 0.
- Any other hour leaves the state unchanged.

The gate is driven by request arrival, not a timer: if no request lands in
hour 12 (or hour 0) that day's check (or reset) is skipped.

The state flips to CHECKED before the alert is sent. A failed send
propagates to the caller but does not re-arm the gate, so a flaky messaging
API cannot cause one alert per request for the rest of the hour.

CHANGELOG:
- 2026-10-16: Commit the state transition before sending the alert
- 2026-10-12: Initial creation

TODO:
- None
"""

from __future__ import annotations

import asyncio
import enum
import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from solaredge_proxy.config import DEFAULT_ALERT_MESSAGE

if TYPE_CHECKING:
    from solaredge_proxy.models import EnergySample, EnergySeries
    from solaredge_proxy.notifier import AlertNotifier

logger = logging.getLogger(__name__)

CHECK_HOUR = 12
RESET_HOUR = 0
MIDDAY_SUFFIX = "12:00:00+02:00"
"""Normalized date suffix identifying the midday sample."""


class CheckState(enum.Enum):
    """Daily check gate state."""

    PENDING = "pending"
    CHECKED = "checked"


def find_midday_sample(series: EnergySeries) -> EnergySample | None:
    """Return the first sample whose normalized date ends in ``12:00:00+02:00``."""
    for sample in series.values:
        if sample.date.endswith(MIDDAY_SUFFIX):
            return sample
    return None


def is_zero_production(sample: EnergySample | None) -> bool:
    """True only for a present sample with a reading of exactly 0.0."""
    return sample is not None and sample.value is not None and sample.value == 0.0


class DailyCheckGate:
    """Gate that runs the midday zero-production check once per day.

    Args:
        notifier: Notifier used when midday production is zero.
        message: Alert message body.
    """

    def __init__(
        self,
        notifier: AlertNotifier,
        message: str = DEFAULT_ALERT_MESSAGE,
    ) -> None:
        self._notifier = notifier
        self._message = message
        self._state = CheckState.PENDING
        self._lock = asyncio.Lock()

    @property
    def state(self) -> CheckState:
        return self._state

    async def maybe_check(self, now: datetime, series: EnergySeries) -> bool:
        """Advance the gate for a request observed at *now*.

        Args:
            now: Request time (timezone-aware); its UTC hour drives the gate.
            series: The normalized series being served to this request.

        Returns:
            bool: True if an alert was sent by this call.

        Raises:
            TransportError: If the alert could not be delivered. The gate
                stays CHECKED.
        """
        hour = now.astimezone(UTC).hour

        async with self._lock:
            if hour == RESET_HOUR and self._state is CheckState.CHECKED:
                self._state = CheckState.PENDING
                logger.info(
                    "Daily check reset for the new day",
                    extra={"hour": hour, "state": self._state.value},
                )
                return False

            if hour != CHECK_HOUR or self._state is not CheckState.PENDING:
                return False

            self._state = CheckState.CHECKED
            midday = find_midday_sample(series)
            should_alert = is_zero_production(midday)

        if midday is None:
            logger.warning("Daily check ran but no midday sample was found")
        logger.info(
            "Daily check ran: midday value=%s, alert=%s",
            midday.value if midday is not None else None,
            should_alert,
            extra={"hour": hour, "state": CheckState.CHECKED.value, "alert": should_alert},
        )

        if not should_alert:
            return False

        await self._notifier.send(self._message)
        return True
