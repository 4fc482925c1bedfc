"""
IdentityService
===============

Application service for the profile side of the ``User`` aggregate: reading
the current account and applying partial profile updates.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from aquatrack.repositories.user import UserRepository
from aquatrack.services._shared.base import BaseService
from aquatrack.services._shared.errors import (
    DuplicateEmailError,
    NotFoundError,
    ServiceError,
    violates,
)
from aquatrack.services.identity.dto import ProfileUpdateIn, UserProfileOut


class IdentityService(BaseService):
    """
    Application service for user profiles.

    Responsibilities
    ----------------
    - Return the public profile of the authenticated user.
    - Apply partial updates while keeping emails unique.
    """

    # --------------------------------------------------------------------- #
    # Retrieval
    # --------------------------------------------------------------------- #

    def get_current(self, user_id: int) -> UserProfileOut:
        """
        Retrieve a user's public profile.

        :param user_id: User primary key.
        :type user_id: int
        :returns: Public-safe user DTO.
        :rtype: UserProfileOut
        :raises NotFoundError: If user does not exist.
        """

        with self.ro_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserProfileOut.from_model(user)

    # --------------------------------------------------------------------- #
    # Update
    # --------------------------------------------------------------------- #

    def update_profile(self, user_id: int, dto: ProfileUpdateIn) -> UserProfileOut:
        """
        Apply the provided (non-empty) profile fields.

        :param user_id: User identifier.
        :type user_id: int
        :param dto: Fields to change; unset ones are left alone.
        :type dto: ProfileUpdateIn
        :returns: Updated user DTO.
        :rtype: UserProfileOut
        :raises ServiceError: When no field carries a value.
        :raises DuplicateEmailError: When the new email belongs to another user.
        :raises NotFoundError: When user not found.
        """
        updates = dto.provided()
        if not updates:
            raise ServiceError("No data to update")

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get_for_update(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            email = updates.get("email")
            if email is not None and repo.exists_by_email(email, exclude_id=user_id):
                raise DuplicateEmailError("Email already exists")

            try:
                repo.update(user, **updates)
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise DuplicateEmailError("Email already exists") from exc
                raise

            out = UserProfileOut.from_model(user)

        self.log.info("identity.profile.updated", extra={"user_id": user_id})
        return out
