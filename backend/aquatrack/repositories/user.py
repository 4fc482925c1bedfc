"""User repository for persistence, authentication and refresh-token state."""

from __future__ import annotations

import hashlib
from typing import cast

from sqlalchemy import select, update

from aquatrack.models.user import User
from aquatrack.repositories.base import BaseRepository


def hash_token(token: str) -> str:
    """Return the SHA-256 hex digest stored in place of a refresh token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Refresh tokens are never stored in clear: every method taking a token
    hashes it with :func:`hash_token` first. This repository NEVER issues or
    decodes JWTs.
    """

    model = User

    def _updatable_fields(self):
        """Profile fields a user may change (never password or token state)."""
        return {"name", "gender", "daily_norm", "weight", "time_active", "email", "avatar_url"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        result = self.session.execute(stmt).scalars().first()
        return cast(User | None, result)

    def exists_by_email(self, email: str, *, exclude_id: int | None = None) -> bool:
        """Return ``True`` when a user with the provided email exists.

        :param email: Email address to normalise and search.
        :type email: str
        :param exclude_id: Ignore this user id (the account being edited).
        :type exclude_id: int | None
        :returns: ``True`` if a row is found; otherwise ``False``.
        :rtype: bool
        """
        stmt = select(User.id).where(User.email == email.lower().strip())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        return bool(self.session.execute(stmt).first())

    def authenticate(self, email: str, password: str) -> User | None:
        """Authenticate a user by email and password.

        :returns: Authenticated user or ``None`` when credentials fail.
        :rtype: User | None
        """
        user = self.get_by_email(email)
        if not user or not user.verify_password(password):
            return None
        return user

    # ---------------------------- Refresh token state ----------------------------

    def save_refresh_token(self, user: User, token: str) -> None:
        """Overwrite the accepted refresh token of ``user`` and flush."""
        user.refresh_token_hash = hash_token(token)
        self.flush()

    def refresh_token_matches(self, user: User, token: str) -> bool:
        """Return ``True`` when ``token`` is the one currently stored for ``user``."""
        return user.refresh_token_hash is not None and user.refresh_token_hash == hash_token(token)

    def rotate_refresh_token(self, user_id: int, old_token: str, new_token: str) -> bool:
        """Swap ``old_token`` for ``new_token`` in a single conditional UPDATE.

        The row only changes while it still holds ``old_token``; of two
        concurrent rotations presenting the same token exactly one matches.

        :param user_id: Owner of the refresh session.
        :type user_id: int
        :param old_token: Token presented by the client.
        :type old_token: str
        :param new_token: Freshly issued replacement.
        :type new_token: str
        :returns: ``True`` when this call performed the rotation.
        :rtype: bool
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.refresh_token_hash == hash_token(old_token))
            .values(refresh_token_hash=hash_token(new_token))
            .execution_options(synchronize_session="evaluate")
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1

    def clear_refresh_token(self, user_id: int) -> bool:
        """Forget the stored refresh token.

        :returns: ``True`` when the user exists.
        :rtype: bool
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(refresh_token_hash=None)
            .execution_options(synchronize_session="evaluate")
        )
        result = self.session.execute(stmt)
        return result.rowcount == 1
