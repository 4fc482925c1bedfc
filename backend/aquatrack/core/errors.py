"""Centralized JSON (RFC 7807) error handling for the API."""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any

from flask import Flask, Response, jsonify, request
from flask_jwt_extended import JWTManager
from marshmallow import ValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from aquatrack.core.logger import ensure_request_id
from aquatrack.services._shared.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    PasswordMismatchError,
    ServiceError,
)

log = logging.getLogger(__name__)


def _http_status_to_code(status_code: int) -> str:
    """Derive a snake_case error code from the status phrase (``404`` -> ``not_found``)."""
    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return "error"
    return phrase.lower().replace("-", "_").replace(" ", "_")


def _as_problem(
    *,
    status: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """
    Build an RFC 7807 Problem Details dict.

    :param status: HTTP status code.
    :param code: Stable machine-consumable error code.
    :param message: Human-readable error summary (safe for clients).
    :param details: Optional safe, structured details.
    :returns: Problem+JSON dictionary.
    :rtype: dict
    """
    problem: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": message,
        "instance": request.path if request else None,
        "code": code,
    }
    if details:
        problem["details"] = details
    problem["request_id"] = ensure_request_id()
    return problem


def _problem_response(problem: dict[str, Any]) -> Response:
    """Return a Flask response with ``application/problem+json`` media type."""
    resp = jsonify(problem)
    resp.mimetype = "application/problem+json"
    return resp


class APIError(Exception):
    """
    Error raised by the HTTP layer and rendered as problem+json.

    ``code`` is the stable, snake_case identifier clients branch on;
    ``message`` becomes the problem's ``detail``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code
        self.details = details or {}

    def to_problem(self) -> dict[str, Any]:
        """Serialize error metadata into an RFC 7807 problem."""
        return _as_problem(
            status=self.status_code,
            code=self.code,
            message=self.message,
            details=self.details or None,
        )


class NotFound(APIError):
    """404 when resources are missing."""

    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, status_code=HTTPStatus.NOT_FOUND, code="not_found")


class Conflict(APIError):
    """409 for uniqueness/constraint collisions."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code="conflict")


class Unauthorized(APIError):
    """401 when authentication fails."""

    def __init__(self, message: str = "Unauthorized", code: str = "unauthorized") -> None:
        super().__init__(message, status_code=HTTPStatus.UNAUTHORIZED, code=code)


def translate_service_error(exc: ServiceError) -> APIError:
    """
    Map a service-layer exception onto its HTTP counterpart.

    :param exc: Exception raised by a service.
    :type exc: ServiceError
    :returns: API error carrying status, code and a client-safe message.
    :rtype: APIError
    """
    if isinstance(exc, NotFoundError):
        return NotFound(str(exc))

    if isinstance(exc, ConflictError):
        return Conflict(exc.detail)

    if isinstance(exc, AuthenticationError):
        return Unauthorized(str(exc), code=exc.code)

    if isinstance(exc, PasswordMismatchError):
        return APIError(str(exc), status_code=400, code="password_mismatch")

    return APIError(str(exc) or "Bad request", status_code=400, code="bad_request")


def _respond(kind: str, problem: dict[str, Any], *, exc_info: bool = False):
    """Log ``problem`` (WARNING for 4xx, ERROR for 5xx) and build the response."""
    status = problem["status"]
    log.log(
        logging.ERROR if status >= 500 else logging.WARNING,
        "%s: code=%s status=%s detail=%s",
        kind,
        problem["code"],
        status,
        problem["detail"],
        extra={"status": status},
        exc_info=exc_info,
    )
    return _problem_response(problem), status


def register_jwt_handlers(manager: JWTManager) -> None:
    """
    Render ``flask-jwt-extended`` failures as problem+json ``401`` responses.

    :param manager: JWT extension whose loader callbacks are replaced.
    :type manager: flask_jwt_extended.JWTManager
    """

    def _unauthorized(code: str, message: str):
        problem = _as_problem(status=HTTPStatus.UNAUTHORIZED, code=code, message=message)
        return _respond("JWTError", problem)

    @manager.unauthorized_loader
    def _missing_token(reason: str):
        return _unauthorized("unauthorized", "Missing access token")

    @manager.invalid_token_loader
    def _invalid_token(reason: str):
        return _unauthorized("invalid_token", "Invalid token")

    @manager.expired_token_loader
    def _expired_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("token_expired", "Token has expired")

    @manager.needs_fresh_token_loader
    def _stale_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("invalid_token", "Fresh token required")

    @manager.revoked_token_loader
    def _revoked_token(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]):
        return _unauthorized("invalid_token", "Token has been revoked")


# Failures whose client-facing problem never depends on the exception text
_OPAQUE_ERRORS: tuple[tuple[type[Exception], HTTPStatus, str, str], ...] = (
    (IntegrityError, HTTPStatus.CONFLICT, "conflict", "Resource conflict"),
    (
        OperationalError,
        HTTPStatus.SERVICE_UNAVAILABLE,
        "service_unavailable",
        "Service temporarily unavailable",
    ),
    (Exception, HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error"),
)


def _opaque_handler(kind: str, status: HTTPStatus, code: str, message: str):
    def handler(err: Exception):
        problem = _as_problem(status=status, code=code, message=message)
        return _respond(kind, problem, exc_info=True)

    return handler


def init_app(app: Flask) -> None:
    """
    Attach the problem+json error handlers.

    Service errors are translated with :func:`translate_service_error`;
    database and unexpected failures get a fixed message and are logged with
    their traceback.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        return _respond("APIError", err.to_problem())

    @app.errorhandler(ServiceError)
    def handle_service_error(err: ServiceError):
        return _respond(type(err).__name__, translate_service_error(err).to_problem())

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            message = f"Route '{request.path}' not found"
        else:
            message = (err.description or HTTPStatus(status).phrase).strip()
        problem = _as_problem(status=status, code=_http_status_to_code(status), message=message)
        return _respond("HTTPException", problem)

    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        problem = _as_problem(
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            code="validation_error",
            message="Validation failed",
            details={"errors": err.messages},
        )
        return _respond("ValidationError", problem)

    for exc_type, status, code, message in _OPAQUE_ERRORS:
        handler = _opaque_handler(exc_type.__name__, status, code, message)
        app.register_error_handler(exc_type, handler)
