"""
Proxy configuration loaded from environment variables.

Uses Pydantic BaseSettings for automatic env var loading and validation.
All values come from environment variables or a .env file; the settings
object is built once at startup and passed into each component's
constructor.

CHANGELOG:
- 2026-10-14: Wrap ValidationError in ConfigError via load_settings()
- 2026-10-12: Initial creation

TODO:
- None
"""

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings

from solaredge_proxy.errors import ConfigError

DEFAULT_ALERT_MESSAGE = "Solar production is zero at midday"
DEFAULT_FRESHNESS_WINDOW_S = 300


class ProxySettings(BaseSettings):
    """Energy proxy configuration.

    Attributes:
        site_id: SolarEdge site identifier.
        api_key: SolarEdge monitoring API key.
        pushover_user: Pushover user key the alert is delivered to.
        pushover_token: Pushover application token.
        monitoring_base_url: Base URL of the SolarEdge monitoring API.
        pushover_base_url: Base URL of the Pushover messaging API.
        freshness_window_s: Maximum age in seconds of the cached series.
        http_timeout_s: Timeout in seconds for every outbound HTTP call.
        alert_message: Message body sent when midday production is zero.
        static_dir: Directory served under /static, if it exists.
    """

    site_id: str
    api_key: str
    pushover_user: str
    pushover_token: str
    monitoring_base_url: str = "https://monitoringapi.solaredge.com"
    pushover_base_url: str = "https://api.pushover.net"
    freshness_window_s: int = DEFAULT_FRESHNESS_WINDOW_S
    http_timeout_s: float = 10.0
    alert_message: str = DEFAULT_ALERT_MESSAGE
    static_dir: str = "static"

    @field_validator("site_id", "api_key", "pushover_user", "pushover_token")
    @classmethod
    def required_must_not_be_blank(cls, v: str) -> str:
        """Reject empty or whitespace-only values for required settings."""
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()

    @field_validator("monitoring_base_url", "pushover_base_url")
    @classmethod
    def base_url_must_be_https(cls, v: str) -> str:
        """Validate that upstream base URLs use HTTPS.

        The API key and Pushover token travel in the request, so plain
        HTTP is rejected at startup. A trailing slash is stripped.
        """
        if not v.lower().startswith("https://"):
            raise ValueError(f"base URL must use HTTPS (got: '{v[:20]}...')")
        return v.rstrip("/")

    @field_validator("freshness_window_s")
    @classmethod
    def freshness_window_must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("FRESHNESS_WINDOW_S must be > 0")
        return v

    @field_validator("http_timeout_s")
    @classmethod
    def http_timeout_must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("HTTP_TIMEOUT_S must be > 0")
        return v

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def load_settings() -> ProxySettings:
    """Build ProxySettings from the environment.

    Returns:
        ProxySettings: The validated configuration.

    Raises:
        ConfigError: If a required variable is missing or a value is invalid.
    """
    try:
        return ProxySettings()
    except ValidationError as exc:
        fields = sorted(
            {str(err["loc"][0]).upper() for err in exc.errors() if err["loc"]}
        )
        raise ConfigError(
            f"Invalid or missing configuration: {', '.join(fields)}"
        ) from exc
