"""Structured Logging — JSON formatter and setup.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (effect, requires, status, url, details) surfaced when present
    - JSON format for services, human-readable for local development
    - configure_logging() applies log_level and log_format from Settings
"""

import json
import logging
from datetime import datetime, timezone

from effect_chain.config import Settings, get_settings

EXTRA_FIELDS = ("effect", "requires", "keys", "status", "url", "details")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Attach a stream handler to the root logger and set its level."""
    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s - %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler


def configure_logging(settings: Settings | None = None) -> logging.Handler:
    """setup_logging() driven by log_level and log_format from settings."""
    settings = settings or get_settings()
    return setup_logging(settings.log_level, settings.log_format)
