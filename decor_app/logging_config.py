"""JSON logging for the style engine.

Every record carries the correlation id of the request being served plus the
``extra`` fields passed by :func:`log_event`. Listing text and links are
masked before a record reaches a handler.
"""

from __future__ import annotations

import contextlib
import contextvars
import json
import logging
import os
import re
import sys
import uuid
from typing import IO, Any, Dict, Iterator, Mapping, Optional

SERVICE_NAME = "decor-style-engine"
CORRELATION_HEADER = "X-Correlation-ID"

CORRELATION_ID: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "decor_correlation_id", default=None
)

# Attributes every LogRecord has; anything else came in through ``extra``.
_RECORD_ATTRS = frozenset(vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))) | {
    "message",
    "asctime",
}

# Listing fields scraped from third-party shops.
REDACTED_FIELDS = frozenset({"title", "description", "url", "image_url"})
_URL_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def __init__(self, service: str = SERVICE_NAME) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record, datefmt="%Y-%m-%dT%H:%M:%S%z"),
            "level": record.levelname,
            "logger": record.name,
            "service": self.service,
            "event": getattr(record, "event", None) or message,
            "message": message,
            "correlation_id": getattr(record, "correlation_id", None) or CORRELATION_ID.get(),
        }
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RECORD_ATTRS and key not in payload
        }
        payload.update(redact_for_log(extras))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def configure_logging(level: int | str | None = None, stream: IO[str] | None = None) -> None:
    """Route root logging through a single JSON handler.

    ``level`` falls back to ``LOG_LEVEL`` and then ``INFO``.
    """

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JsonFormatter())
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level or os.getenv("LOG_LEVEL", "INFO"))


def redact_for_log(payload: Any) -> Any:
    """Mask listing fields and links anywhere inside ``payload``."""

    if isinstance(payload, str):
        return _URL_PATTERN.sub("[redacted-url]", payload)
    if isinstance(payload, Mapping):
        return {
            key: "[redacted]" if key in REDACTED_FIELDS else redact_for_log(value)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple, set, frozenset)):
        return [redact_for_log(item) for item in payload]
    return payload


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        configure_logging()
    return logging.getLogger(name)


def ensure_correlation_id(correlation_id: str | None = None) -> str:
    """Return the active correlation id, assigning ``correlation_id`` or a fresh one."""

    if correlation_id:
        CORRELATION_ID.set(correlation_id)
        return correlation_id
    current = CORRELATION_ID.get()
    if current:
        return current
    fresh = uuid.uuid4().hex
    CORRELATION_ID.set(fresh)
    return fresh


@contextlib.contextmanager
def correlation_context(correlation_id: str | None = None) -> Iterator[str]:
    """Scope a correlation id to one unit of work, such as an HTTP request."""

    token = CORRELATION_ID.set(correlation_id or uuid.uuid4().hex)
    try:
        yield CORRELATION_ID.get()  # type: ignore[misc]
    finally:
        CORRELATION_ID.reset(token)


def log_event(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    """Log ``event`` with structured ``fields`` attached as record attributes."""

    correlation_id = ensure_correlation_id(fields.pop("correlation_id", None))
    exc_info = fields.pop("exc_info", None)
    logger.log(
        level,
        event,
        exc_info=exc_info,
        extra={"event": event, "correlation_id": correlation_id, **redact_for_log(fields)},
    )


__all__ = [
    "CORRELATION_HEADER",
    "JsonFormatter",
    "configure_logging",
    "correlation_context",
    "ensure_correlation_id",
    "get_logger",
    "log_event",
    "redact_for_log",
]
