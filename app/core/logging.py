"""Clicks Connector: Structured JSON Logging."""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Optional

from app.config import settings

EXTRA_FIELDS = ("endpoint", "status_code", "duration_ms", "field_count", "row_count")


class JSONFormatter(logging.Formatter):
    """Produces structured JSON log lines."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)
        return json.dumps(log_entry)


def get_logger(name: str) -> logging.Logger:
    """Return a named logger with structured JSON handler."""
    logger = logging.getLogger(f"clicks.{name}")
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))
    return logger


def mask_key(key: Optional[str]) -> str:
    """Mask an API key for safe logging, keeping the last 4 characters."""
    if not key:
        return "<empty>"
    if len(key) <= 4:
        return "****"
    return f"****{key[-4:]}"
