"""
In-process cache for the most recent SolarEdge energy series.

Holds one CacheEntry (last refresh time plus normalized series). Requests
inside the freshness window are served from memory; the first request after
the window expires refreshes from the monitoring API.

Concurrency (asyncio, single event loop):
- Fresh reads never wait. The entry is an immutable object replaced by a
  single reference assignment, so a reader always sees a complete entry.
- Refreshes are single-flight. The first stale caller starts a refresh task;
  every stale caller arriving while it runs awaits that same task and gets
  its result or its exception. A burst of stale requests therefore causes
  one upstream fetch whether it succeeds or fails, and a hung fetch stalls
  only the requests waiting on it.
- A failed refresh publishes nothing; the error goes to every waiter and the
  stale entry is NOT served as a fallback. The next request after the
  failure starts a new refresh.

CHANGELOG:
- 2026-10-20: Share one in-flight refresh task between stale callers
- 2026-10-15: Double-check staleness under the refresh lock
- 2026-10-12: Initial creation

TODO:
- None
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from solaredge_proxy.config import DEFAULT_FRESHNESS_WINDOW_S
from solaredge_proxy.models import EnergySeries
from solaredge_proxy.normalizer import normalize_series

if TYPE_CHECKING:
    from solaredge_proxy.telemetry_client import TelemetryClient

logger = logging.getLogger(__name__)

NEVER_REFRESHED = datetime.fromtimestamp(0, tz=UTC)
"""``last_refreshed`` of a cache that has not refreshed successfully yet."""


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """Snapshot of the last successful refresh.

    Attributes:
        last_refreshed: Time of the refresh that produced ``series``.
        series: Normalized series, or the empty series before the first
            successful refresh.
    """

    last_refreshed: datetime
    series: EnergySeries


class TelemetryCache:
    """Freshness-window cache in front of a :class:`TelemetryClient`.

    Args:
        client: Upstream client used to refresh the series.
        freshness_window_s: Maximum age in seconds of a cached series.

    Usage::

        cache = TelemetryCache(client, freshness_window_s=300)
        series = await cache.get(datetime.now(tz=UTC))
    """

    def __init__(
        self,
        client: TelemetryClient,
        freshness_window_s: int = DEFAULT_FRESHNESS_WINDOW_S,
    ) -> None:
        self._client = client
        self._window = timedelta(seconds=freshness_window_s)
        self._entry = CacheEntry(
            last_refreshed=NEVER_REFRESHED,
            series=EnergySeries.empty(),
        )
        self._inflight: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def last_refreshed(self) -> datetime:
        """Time of the last successful refresh (epoch if none yet)."""
        return self._entry.last_refreshed

    @property
    def ever_refreshed(self) -> bool:
        """True once a refresh has succeeded."""
        return self._entry.last_refreshed != NEVER_REFRESHED

    def is_stale(self, now: datetime) -> bool:
        """Return True if more than the freshness window has passed since the last refresh."""
        return now - self._entry.last_refreshed > self._window

    async def get(self, now: datetime) -> EnergySeries:
        """Return the cached series, refreshing first if it is stale.

        Args:
            now: Current time (timezone-aware). Its UTC date selects the
                day fetched on refresh.

        Returns:
            EnergySeries: A deep copy of the cached, normalized series.

        Raises:
            TransportError: If a required refresh failed at the network level.
            DecodeError: If a required refresh returned a malformed body.
        """
        if self.is_stale(now):
            await self._join_refresh(now)
        return self._entry.series.model_copy(deep=True)

    async def refresh(self, now: datetime) -> EnergySeries:
        """Refresh from upstream regardless of freshness and publish the result.

        If a refresh is already running, waits for that one instead of
        starting a second fetch.

        Raises:
            TransportError: On upstream network failure.
            DecodeError: On a malformed upstream body.
        """
        await self._join_refresh(now)
        return self._entry.series.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _join_refresh(self, now: datetime) -> None:
        """Await the in-flight refresh, starting one if none is running."""
        task = self._inflight
        if task is None:
            task = asyncio.create_task(self._run_refresh(now))
            self._inflight = task
        else:
            logger.debug("Joining in-flight cache refresh")
        # Shielded so a disconnecting client does not cancel the shared fetch.
        await asyncio.shield(task)

    async def _run_refresh(self, now: datetime) -> None:
        """Fetch, normalize and publish, then clear the in-flight slot."""
        day = now.astimezone(UTC).date()
        try:
            raw = await self._client.fetch_today(day)
        except Exception:
            logger.warning(
                "Cache refresh failed, keeping entry from %s",
                self._entry.last_refreshed.isoformat(),
                extra={"day": day.isoformat()},
            )
            raise
        else:
            series = normalize_series(raw)
            self._entry = CacheEntry(last_refreshed=now, series=series)
            logger.info(
                "Cache refreshed with %d samples for %s",
                len(series.values),
                day.isoformat(),
                extra={"day": day.isoformat(), "samples": len(series.values)},
            )
        finally:
            self._inflight = None
