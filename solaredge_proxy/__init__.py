"""
SolarEdge energy proxy.

Fetches today's quarter-hour energy series from the SolarEdge monitoring API,
caches it for a short freshness window, normalizes sample timestamps, and
sends a Pushover alert once per day when midday production is zero.

CHANGELOG:
- 2026-10-12: Initial creation

TODO:
- None
"""

__version__ = "0.1.0"
