"""
Logging setup for urlalias.

Responsibilities:
    - Configure the "urlalias" logger once per process, based on environment
    - Provide human-readable output for local runs and JSON lines elsewhere
    - Provide a discard logger for tests

Environments:
    - local : DEBUG, text with structured extras appended as key=value
    - dev   : DEBUG, JSON
    - prod  : INFO, JSON (also the fallback for unknown values)

Structured fields are passed via `extra=` (e.g. `extra={"op": "...", "alias": "abc"}`)
and rendered by both formatters.
"""

import json
import logging
import sys
from typing import Any, Dict

from .config import ENV_DEV, ENV_LOCAL

LOGGER_NAME = "urlalias"

# Attributes every LogRecord carries; anything else came in through `extra=`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


def _extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}


class PrettyFormatter(logging.Formatter):
    """Text formatter that appends structured extras as key=value pairs."""

    def __init__(self):
        super().__init__("%(asctime)s [%(levelname)s] %(name)s - %(message)s", datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = _extras(record)
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        payload.update(_extras(record))
        if record.exc_info:
            payload["error"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logger(env: str) -> logging.Logger:
    """
    Configure and return the service logger for the given environment.

    Calling it again replaces the handlers, so repeated app construction
    (tests, reloads) does not duplicate output.
    """
    if env == ENV_LOCAL:
        level, formatter = logging.DEBUG, PrettyFormatter()
    elif env == ENV_DEV:
        level, formatter = logging.DEBUG, JsonFormatter()
    else:
        level, formatter = logging.INFO, JsonFormatter()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def discard_logger() -> logging.Logger:
    """Return a logger that drops every record."""
    logger = logging.getLogger(f"{LOGGER_NAME}.discard")
    logger.handlers.clear()
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    return logger
