# aquatrack/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

from aquatrack.services.identity.dto import UserProfileOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for account registration.

    :param email: Login email (normalized by the model).
    :type email: str
    :param password: Raw password (hashed before storage).
    :type password: str
    :param repeat_password: Confirmation that must equal ``password``.
    :type repeat_password: str
    :param name: Display name.
    :type name: str
    :param gender: Free-form gender tag.
    :type gender: str
    :param daily_norm: Daily intake goal in millilitres.
    :type daily_norm: float
    :param weight: Body weight.
    :type weight: float
    :param time_active: Daily active time.
    :type time_active: float
    """

    email: str
    password: str
    repeat_password: str
    name: str = "User"
    gender: str = "undefined"
    daily_norm: float = 2000.0
    weight: float = 0.0
    time_active: float = 0.0


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    refresh_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisteredOut:
    """
    Output DTO for a freshly created account.

    :param id: New user identifier.
    :type id: int
    :param email: Normalized email.
    :type email: str
    """

    id: int
    email: str


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """
    Output DTO for a successful login.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    :param user: Public profile of the authenticated user.
    :type user: UserProfileOut
    """

    access_token: str
    refresh_token: str
    user: UserProfileOut
