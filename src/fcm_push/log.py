"""Structured JSON logging setup."""

import json
import logging
import sys
from collections.abc import Sequence
from datetime import datetime, timezone

from fcm_push.config import get_settings

# Build the set of standard LogRecord attributes so we can extract
# extra fields added via `extra={...}` in log calls.
_STANDARD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
    | {"message", "asctime"}
)

logger = logging.getLogger("fcm_push")


class JsonFormatter(logging.Formatter):
    """Single-line JSON log formatter for structured log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, object] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                log_entry[key] = value

        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(
    level: str | None = None,
    suppress: Sequence[str] = ("httpx", "httpcore", "hpack"),
) -> None:
    """Configure root logger with JSON formatter to stdout.

    Args:
        level: Root log level (e.g. "INFO", "DEBUG"). Defaults to
               ``PushSettings.log_level``.
        suppress: Logger names to set to WARNING to reduce noise from
                  the HTTP/2 stack.
    """
    if level is None:
        level = get_settings().log_level

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    root.handlers.clear()
    root.addHandler(handler)

    for name in suppress:
        logging.getLogger(name).setLevel(logging.WARNING)


def log_error(code: int | str, reason: object) -> None:
    """Log an HTTP error response, only when debug logging is switched on."""
    if get_settings().debug_log:
        logger.error("%s: %s", reason, code, extra={"status_code": str(code)})
