"""JSON logging to stdout, with every line tied to its HTTP request."""

from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
# Checked in order; the first non-empty one becomes the request id
CORRELATION_HEADERS = ("X-Request-ID", "X-Correlation-ID")

# ``extra=`` attributes that make it into the JSON line
EXTRA_KEYS = ("endpoint", "elapsed_ms", "user_id", "record_id", "reason", "status")


class JSONFormatter(logging.Formatter):
    """One JSON object per log record.

    Only attributes named in ``extra_keys`` are copied from ``extra=``, so
    arbitrary objects attached to a record never reach the output.
    """

    def __init__(self, extra_keys: Iterable[str] = EXTRA_KEYS) -> None:
        super().__init__()
        self.extra_keys = tuple(extra_keys)

    def format(self, record: logging.LogRecord) -> str:
        line: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        line.update(
            (key, getattr(record, key)) for key in self.extra_keys if hasattr(record, key)
        )
        if record.exc_info:
            line["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(line, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``record.request_id`` (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def _incoming_request_id() -> str | None:
    return next(
        (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)),
        None,
    )


def ensure_request_id() -> str:
    """
    Return the id of the current request, assigning one on first use.

    A caller-supplied correlation header wins over a generated UUID. Outside a
    request every call returns a fresh UUID.
    """
    if not has_request_context():
        return str(uuid4())
    if "request_id" not in g:
        g.request_id = _incoming_request_id() or str(uuid4())
    return str(g.request_id)


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = "INFO") -> None:
    """Send the root logger's output to stdout as JSON, replacing other handlers."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(_resolve_level(level))


def init_app(app: Flask) -> None:
    """Assign a request id before each request and echo it in the response."""
    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _assign_request_id() -> None:
        # ``g`` lives on the app context, which may span several requests
        g.pop("request_id", None)
        ensure_request_id()

    @app.after_request
    def _echo_request_id(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        return response


__all__ = [
    "JSONFormatter",
    "RequestIdFilter",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
