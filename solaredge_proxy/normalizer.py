"""
Pure timestamp normalizer for SolarEdge energy samples.

SolarEdge reports sample dates as site-local ``"YYYY-MM-DD HH:MM:SS"``
strings without an offset. The dashboard needs ISO 8601, so each date has its
space replaced by ``T`` and a fixed ``+02:00`` offset appended. The offset is
hardcoded and does not follow daylight-saving changes; clients depend on this
exact format.

These are pure functions: no I/O, no clock, input models are not mutated.

CHANGELOG:
- 2026-10-12: Initial creation

TODO:
- Derive the offset from the site's timezone once dashboard clients accept it.
"""

from __future__ import annotations

from solaredge_proxy.models import EnergySample, EnergySeries

FIXED_UTC_OFFSET = "+02:00"
"""Offset appended to every normalized sample date."""


def normalize_timestamp(raw: str) -> str:
    """Convert an upstream sample date to fixed-offset ISO 8601.

    Args:
        raw: Upstream date, e.g. ``"2024-05-01 12:00:00"``.

    Returns:
        str: e.g. ``"2024-05-01T12:00:00+02:00"``.
    """
    return f"{raw.replace(' ', 'T')}{FIXED_UTC_OFFSET}"


def normalize_series(series: EnergySeries) -> EnergySeries:
    """Return a copy of *series* with every sample date normalized.

    Sample order and values are preserved.
    """
    return EnergySeries(
        time_unit=series.time_unit,
        unit=series.unit,
        values=[
            EnergySample(date=normalize_timestamp(sample.date), value=sample.value)
            for sample in series.values
        ],
    )
