"""
DTOs for IdentityService.

Data Transfer Objects (DTOs) isolate the service layer from ORM models,
ensuring clear input/output contracts and type safety.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from aquatrack.models.user import User

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """
    Input DTO for a partial profile update.

    ``None`` and empty strings mean "leave unchanged".

    :param name: Optional new display name.
    :type name: str | None
    :param gender: Optional new gender tag.
    :type gender: str | None
    :param daily_norm: Optional new daily goal.
    :type daily_norm: float | None
    :param weight: Optional new weight.
    :type weight: float | None
    :param time_active: Optional new active time.
    :type time_active: float | None
    :param email: Optional new login email.
    :type email: str | None
    :param avatar_url: Optional new picture location.
    :type avatar_url: str | None
    """

    name: str | None = None
    gender: str | None = None
    daily_norm: float | None = None
    weight: float | None = None
    time_active: float | None = None
    email: str | None = None
    avatar_url: str | None = None

    def provided(self) -> dict[str, Any]:
        """Return only the fields carrying a value."""
        return {k: v for k, v in asdict(self).items() if v is not None and v != ""}


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserProfileOut:
    """
    Output DTO representing public-safe user data (no hashes, no tokens).

    :param id: User identifier.
    :type id: int
    :param email: Email address.
    :type email: str
    :param name: Display name.
    :type name: str
    :param gender: Gender tag.
    :type gender: str
    :param daily_norm: Daily intake goal.
    :type daily_norm: float
    :param weight: Body weight.
    :type weight: float
    :param time_active: Daily active time.
    :type time_active: float
    :param avatar_url: Optional picture location.
    :type avatar_url: str | None
    """

    id: int
    email: str
    name: str
    gender: str
    daily_norm: float
    weight: float
    time_active: float
    avatar_url: str | None

    @classmethod
    def from_model(cls, user: User) -> UserProfileOut:
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            gender=user.gender,
            daily_norm=user.daily_norm,
            weight=user.weight,
            time_active=user.time_active,
            avatar_url=user.avatar_url,
        )
