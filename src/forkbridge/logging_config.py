"""Logging setup for forkbridge.

Every module logs under the ``forkbridge`` logger. Records are written as JSON
lines by default (FORKBRIDGE_LOG_FORMAT=text for plain lines). Credentials
travel through this package as opaque Authorization header values, so any
extra named like one is redacted before it is written.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER = "forkbridge"

SENSITIVE_KEYS = {
    "access_token",
    "auth",
    "authorization",
    "bearer",
    "client_secret",
    "code",
    "credential",
    "password",
    "secret",
    "token",
}

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    }
)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record.

    Keys: ``timestamp`` (UTC, ``Z`` suffix), ``level``, ``logger``, ``message``,
    then ``context`` holding the record's extras and ``exception`` when a
    traceback is attached.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {}
        for key, value in record.__dict__.items():
            if key in _STANDARD_FIELDS or key.startswith("_"):
                continue
            context[key] = "[REDACTED]" if key.lower() in SENSITIVE_KEYS else value
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )


def _own_handler(logger: logging.Logger) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == ROOT_LOGGER:
            return handler
    return None


def configure_logging(level: Optional[str] = None) -> None:
    """Install the forkbridge handler and set the package log level.

    ``level`` defaults to FORKBRIDGE_LOG_LEVEL (INFO when unset or unknown).
    Handlers attached by others (test capture, host applications) are left
    alone; the package's own handler is added once and reformatted on later
    calls.
    """
    if level is None:
        level = os.getenv("FORKBRIDGE_LOG_LEVEL", "INFO")
    log_level = getattr(logging, level.upper(), logging.INFO)

    if os.getenv("FORKBRIDGE_LOG_FORMAT", "json").lower() == "text":
        formatter: logging.Formatter = TextFormatter()
    else:
        formatter = StructuredFormatter()

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(log_level)

    handler = _own_handler(logger)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(ROOT_LOGGER)
        logger.addHandler(handler)
    handler.setFormatter(formatter)

    logger.propagate = False
