"""Logging setup for the converter CLI.

Progress lines ("Processing", "Created") and failures are emitted through the
standard :mod:`logging` tree. Anything passed via ``extra=`` (the input
``source``, the ``output`` path, the issue key) is appended to the line as
``key=value`` pairs, or becomes a field of the JSON object when
``CONVERTTOMD_LOG_JSON=true``.
"""
from __future__ import annotations

import json
import logging
import os
import sys
import threading
from datetime import datetime, timezone
from typing import Any, Dict

_LOCK = threading.Lock()
_HANDLER: logging.Handler | None = None

# Attributes every LogRecord carries; whatever else is on a record came from ``extra``.
_RECORD_ATTRS = frozenset(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message"}


def _context(record: logging.LogRecord) -> Dict[str, Any]:
    return {key: value for key, value in record.__dict__.items() if key not in _RECORD_ATTRS}


class ContextFormatter(logging.Formatter):
    """Render a record with its ``extra`` context, as text or as JSON."""

    def __init__(self, *, as_json: bool = False) -> None:
        super().__init__()
        self.as_json = as_json

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        context = _context(record)
        if self.as_json:
            payload: Dict[str, Any] = {
                "timestamp": timestamp.isoformat(),
                "level": record.levelname,
                "logger": record.name,
                "message": record.getMessage(),
                **context,
            }
            if record.exc_info:
                payload["exception"] = self.formatException(record.exc_info)
            return json.dumps(payload, ensure_ascii=False, default=str)

        line = f"{timestamp:%Y-%m-%dT%H:%M:%S}Z {record.levelname} {record.name}: {record.getMessage()}"
        if context:
            line += " " + " ".join(f"{key}={value}" for key, value in sorted(context.items()))
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def _resolve_level(name: str | None) -> int:
    if not name:
        name = os.getenv("CONVERTTOMD_LOG_LEVEL", "WARNING")
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level_override: str | None = None) -> None:
    """Install the stdout handler once; later calls only adjust the level.

    Without an override the level comes from ``CONVERTTOMD_LOG_LEVEL``
    (default ``WARNING``) on first configuration. Unknown level names map to
    ``INFO``.
    """

    global _HANDLER

    with _LOCK:
        root = logging.getLogger()
        if _HANDLER is None:
            _HANDLER = logging.StreamHandler(stream=sys.stdout)
            as_json = os.getenv("CONVERTTOMD_LOG_JSON", "false").strip().lower() == "true"
            _HANDLER.setFormatter(ContextFormatter(as_json=as_json))
            root.addHandler(_HANDLER)
            root.setLevel(_resolve_level(level_override))
        elif level_override:
            root.setLevel(_resolve_level(level_override))


def reset_logging() -> None:
    """Remove the installed handler so the next call starts over."""

    global _HANDLER

    with _LOCK:
        if _HANDLER is not None:
            logging.getLogger().removeHandler(_HANDLER)
        _HANDLER = None


def get_logger(name: str) -> logging.Logger:
    """Return a logger, configuring the handler on first use."""

    configure_logging()
    return logging.getLogger(name)


__all__ = ["ContextFormatter", "configure_logging", "get_logger", "reset_logging"]
