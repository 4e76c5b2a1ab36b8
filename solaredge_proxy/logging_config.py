"""
Structured JSON logging for the energy proxy.

CHANGELOG:
- 2026-10-20: Emit cache and daily check context fields
- 2026-10-12: Initial creation

TODO:
- None
"""

from __future__ import annotations

import hashlib
import json
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from solaredge_proxy.config import ProxySettings

logger = logging.getLogger(__name__)


class JsonFormatter(logging.Formatter):
    """One JSON object per line, with proxy context fields when present.

    Context fields are passed through ``extra=`` at the call site, e.g. the
    refreshed day and sample count from the cache or the UTC hour and gate
    state from the daily check. Only the names in ``CONTEXT_FIELDS`` are
    emitted, so arbitrary record attributes never leak into the output.
    """

    CONTEXT_FIELDS = ("day", "samples", "hour", "state", "alert")

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        context = {
            name: getattr(record, name)
            for name in self.CONTEXT_FIELDS
            if hasattr(record, name)
        }
        if context:
            log_entry["context"] = context
        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def configure_logging(level: int = logging.INFO) -> None:
    """Install the JSON formatter on the root logger, writing to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def masked_secret(value: str | None) -> str:
    """Fingerprint a credential for the startup log.

    Shows only the last two characters and a short SHA-256 prefix, enough to
    tell which API key or Pushover token is deployed without revealing it.
    """
    if not value:
        return "<unset>"
    digest = hashlib.sha256(value.encode("utf-8")).hexdigest()[:8]
    return f"*{value[-2:]} (sha256:{digest})"


def log_config_summary(settings: ProxySettings) -> None:
    """Log the effective configuration at startup with secrets masked."""
    logger.info(
        "Energy proxy starting with config: "
        "site_id=%s, monitoring_base_url=%s, pushover_base_url=%s, "
        "freshness_window_s=%s, http_timeout_s=%s, static_dir=%s, "
        "api_key_masked=%s, pushover_user_masked=%s, pushover_token_masked=%s",
        settings.site_id,
        settings.monitoring_base_url,
        settings.pushover_base_url,
        settings.freshness_window_s,
        settings.http_timeout_s,
        settings.static_dir,
        masked_secret(settings.api_key),
        masked_secret(settings.pushover_user),
        masked_secret(settings.pushover_token),
    )
