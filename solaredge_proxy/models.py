"""
Pydantic models for SolarEdge energy telemetry.

The same shapes are used for the upstream monitoring API body and for the
/api/energy response, so the JSON field names (``timeUnit``, ``values``,
``date``) follow the upstream wire format.

CHANGELOG:
- 2026-10-12: Initial creation

TODO:
- None
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class EnergySample(BaseModel):
    """A single quarter-hour energy reading.

    Attributes:
        date: Sample timestamp. Upstream sends ``"YYYY-MM-DD HH:MM:SS"``
            local time; after normalization it is ISO 8601 with a fixed
            ``+02:00`` offset.
        value: Energy in the series unit, or ``None`` when upstream has no
            reading for the slot (e.g. future quarter-hours).
    """

    date: str
    value: float | None = None


class EnergySeries(BaseModel):
    """An ordered day of energy samples.

    Attributes:
        time_unit: Upstream granularity, e.g. ``QUARTER_OF_AN_HOUR``.
        unit: Energy unit, e.g. ``Wh``.
        values: Samples in upstream chronological order.
    """

    model_config = ConfigDict(populate_by_name=True)

    time_unit: str = Field(alias="timeUnit")
    unit: str
    values: list[EnergySample] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> EnergySeries:
        """Return the zero-value series held before the first refresh."""
        return cls(time_unit="", unit="", values=[])


class EnergyResponse(BaseModel):
    """Envelope ``{"energy": {...}}`` used upstream and by /api/energy."""

    energy: EnergySeries
