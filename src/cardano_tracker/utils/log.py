"""Structured logging setup.

Clients log an event name as the message and pass attributes through
``extra``::

    logger.info("api_success", extra={"context": "ada-spot(USD)", "latency_ms": 84})

``JsonFormatter`` turns each record into a single JSON line on stderr so
stdout stays free for command output.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any

# Attributes every LogRecord carries; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


def get_extra_attributes(record: logging.LogRecord) -> dict[str, Any]:
    """Return the key/value attributes attached to a record via ``extra``."""
    return {key: value for key, value in vars(record).items() if key not in _RESERVED_ATTRS}


class JsonFormatter(logging.Formatter):
    """Format records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname.lower(),
            "event": record.getMessage(),
            "logger": record.name,
        }
        entry.update(get_extra_attributes(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable format with attributes appended as ``key=value``."""

    def __init__(self) -> None:
        super().__init__("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        attributes = get_extra_attributes(record)
        if attributes:
            line += " " + " ".join(f"{key}={value}" for key, value in attributes.items())
        return line


def setup_logging(level: str | int = "INFO", fmt: str = "json") -> logging.Handler:
    """Install a stderr handler on the root logger and return it."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if fmt == "json" else TextFormatter())

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level.upper() if isinstance(level, str) else level)

    # aiohttp is chatty at debug level
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    return handler
