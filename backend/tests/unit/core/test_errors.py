"""Tests for service-to-HTTP error translation."""

from __future__ import annotations

import pytest
from aquatrack.core.errors import (
    APIError,
    Conflict,
    NotFound,
    Unauthorized,
    translate_service_error,
)
from aquatrack.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    PasswordMismatchError,
    ServiceError,
)


@pytest.mark.parametrize(
    ("exc", "cls", "status", "code", "message"),
    [
        (NotFoundError("Water record", 3), NotFound, 404, "not_found", "Water record not found: 3"),
        (DuplicateEmailError(), Conflict, 409, "conflict", "User already exists"),
        (
            DuplicateEmailError("Email already exists"),
            Conflict,
            409,
            "conflict",
            "Email already exists",
        ),
        (
            InvalidCredentialsError(),
            Unauthorized,
            401,
            "invalid_credentials",
            "Invalid credentials",
        ),
        (InvalidTokenError(), Unauthorized, 401, "invalid_token", "Invalid token"),
        (PasswordMismatchError(), APIError, 400, "password_mismatch", "Passwords do not match"),
        (ServiceError("No data to update"), APIError, 400, "bad_request", "No data to update"),
    ],
)
def test_translate_service_error(exc, cls, status, code, message):
    api_err = translate_service_error(exc)

    assert isinstance(api_err, cls)
    assert api_err.status_code == status
    assert api_err.code == code
    assert api_err.message == message
