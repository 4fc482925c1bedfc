"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the contract between repositories, services and the API
layer; ``aquatrack/core/errors.py`` translates them into RFC 7807 responses.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    PostgreSQL reports the constraint name in the message. SQLite only reports
    the offending columns (``UNIQUE constraint failed: users.email``), so the
    ``uq_<table>_<column>`` convention is also matched against that form.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :type exc: IntegrityError
    :param constraint_name: Constraint to match (e.g. ``"uq_users_email"``).
    :type constraint_name: str
    :returns: ``True`` if the IntegrityError matches the given constraint.
    :rtype: bool
    """
    message = str(exc.orig).lower() if exc.orig else ""
    name = constraint_name.lower()
    if name in message:
        return True
    if name.startswith("uq_"):
        table, _, column = name[3:].partition("_")
        return f"{table}.{column}" in message
    return False


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - They can be safely raised from repositories or domain logic.
    - Anything not covered by a subclass surfaces as ``400 Bad Request``.
    """

    pass


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class DuplicateEmailError(ConflictError):
    """Raised when an email address already belongs to an account."""

    def __init__(self, detail: str = "User already exists") -> None:
        super().__init__("User", detail)


class PasswordMismatchError(ServiceError):
    """Raised when the registration password and its confirmation differ."""

    def __init__(self, message: str = "Passwords do not match") -> None:
        super().__init__(message)


class AuthenticationError(ServiceError):
    """Base class for failures that must surface as ``401 Unauthorized``."""

    code = "unauthorized"


class InvalidCredentialsError(AuthenticationError):
    """
    Raised for both an unknown email and a wrong password.

    Callers cannot tell the two cases apart.
    """

    code = "invalid_credentials"

    def __init__(self, message: str = "Invalid credentials") -> None:
        super().__init__(message)


class InvalidTokenError(AuthenticationError):
    """Raised when a token is malformed, badly signed, expired or revoked."""

    code = "invalid_token"

    def __init__(self, message: str = "Invalid token") -> None:
        super().__init__(message)
