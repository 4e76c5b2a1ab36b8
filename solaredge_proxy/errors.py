"""
Error taxonomy for the energy proxy.

Runtime errors (TransportError, DecodeError) are raised by the outbound
clients and propagate unmodified through the cache and the daily check gate
to the request handler, which maps them to HTTP 502. ConfigError is raised
at startup only and aborts the application before it serves requests.

CHANGELOG:
- 2026-10-12: Initial creation

TODO:
- None
"""


class ProxyError(Exception):
    """Base class for all energy proxy errors."""


class TransportError(ProxyError):
    """Network or HTTP-level failure talking to an upstream service.

    Raised on connection errors, timeouts, and non-2xx responses from either
    the monitoring API or the Pushover messaging API.
    """


class DecodeError(ProxyError):
    """Upstream response body does not match the expected shape."""


class ConfigError(ProxyError):
    """Required configuration is missing or invalid."""
