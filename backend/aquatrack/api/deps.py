"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from aquatrack.services._shared.errors import InvalidTokenError

F = TypeVar("F", bound=Callable[..., Any])


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token.

    Verification goes through Flask-JWT-Extended, so missing, expired and
    malformed tokens get the JWT loaders' problem responses. The verified user
    id is stored on ``g.user_id``; read it with :func:`current_user_id`.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        identity = get_jwt_identity()
        if not isinstance(identity, str) or not identity.isdigit():
            raise InvalidTokenError()
        g.user_id = int(identity)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int:
    """Return the id resolved by :func:`require_auth` for this request."""

    return cast(int, g.user_id)


def json_body() -> dict[str, Any]:
    """Return the JSON body, or an empty mapping when absent or malformed."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
