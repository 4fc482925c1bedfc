# aquatrack/services/auth/service.py
from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from aquatrack.models.user import User
from aquatrack.repositories.user import UserRepository
from aquatrack.services._shared.base import BaseService
from aquatrack.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    PasswordMismatchError,
    violates,
)
from aquatrack.services._shared.ports import TokenProvider
from aquatrack.services.auth.dto import (
    LoginIn,
    LoginOut,
    RefreshIn,
    RegisteredOut,
    RegisterIn,
    TokenPairOut,
)
from aquatrack.services.identity.dto import UserProfileOut


class AuthService(BaseService):
    """
    Account session lifecycle (register / login / refresh / logout).

    Each user holds at most one accepted refresh token, stored as a digest on
    the user row. Logging in replaces it, refreshing rotates it, logging out
    clears it. Session operations never touch profile fields.
    """

    def __init__(self, *, token_provider: TokenProvider | None = None) -> None:
        """
        Initialize the service with its token adapter.

        :param token_provider: Adapter issuing/validating JWTs. Defaults to
            :class:`~aquatrack.infra.jwt.token_provider.JWTTokenProvider`.
        """
        # Deferred: the infra adapter imports from this package.
        from aquatrack.infra.jwt.token_provider import JWTTokenProvider

        super().__init__()
        self.tokens = token_provider or JWTTokenProvider()

    # ------------------------------------------------------------------ #
    # Register
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> RegisteredOut:
        """
        Create an account.

        :param dto: Registration input.
        :returns: Identifier and normalized email of the new account.
        :raises PasswordMismatchError: If the confirmation differs.
        :raises DuplicateEmailError: If the email is already registered.
        """
        if dto.password != dto.repeat_password:
            raise PasswordMismatchError()

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email):
                raise DuplicateEmailError()

            try:
                user = User(
                    email=dto.email,
                    password=dto.password,  # model hashes via setter
                    name=dto.name,
                    gender=dto.gender,
                    daily_norm=dto.daily_norm,
                    weight=dto.weight,
                    time_active=dto.time_active,
                )
                repo.add(user)
            except IntegrityError as exc:
                # Lost the race against a concurrent registration
                if violates(exc, "uq_users_email"):
                    raise DuplicateEmailError() from exc
                raise

            out = RegisteredOut(id=user.id, email=user.email)

        self.log.info("auth.register", extra={"user_id": out.id})
        return out

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Authenticate credentials and issue a fresh token pair.

        The new refresh token replaces any previous one, ending the older
        session.

        :param dto: Login input.
        :returns: Token pair plus the public profile.
        :raises InvalidCredentialsError: For unknown email or wrong password.
        """
        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.authenticate(dto.email, dto.password)
            if user is None:
                self.log.warning("auth.login.rejected", extra={"reason": "invalid_credentials"})
                raise InvalidCredentialsError()

            access = self.tokens.issue_access_token(user.id)
            refresh = self.tokens.issue_refresh_token(user.id)
            repo.save_refresh_token(user, refresh)
            profile = UserProfileOut.from_model(user)

        self.log.info("auth.login", extra={"user_id": profile.id})
        return LoginOut(access_token=access, refresh_token=refresh, user=profile)

    # ------------------------------------------------------------------ #
    # Refresh with atomic rotation
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Exchange the current refresh token for a new pair.

        The token's lifetime is not checked; it must be the one stored for its
        user. Rotation is a conditional UPDATE, so of two concurrent calls with
        the same token only one succeeds.

        :param dto: Refresh input.
        :returns: New access/refresh pair.
        :raises InvalidTokenError: Bad signature, unknown user, stale or
            revoked token.
        """
        claims = self.tokens.validate_expired_refresh_token(dto.refresh_token)
        user_id: int = claims["id"]

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None or not repo.refresh_token_matches(user, dto.refresh_token):
                self.log.warning(
                    "auth.refresh.rejected", extra={"user_id": user_id, "reason": "stale_token"}
                )
                raise InvalidTokenError()

            access = self.tokens.issue_access_token(user_id)
            refresh = self.tokens.issue_refresh_token(user_id)
            if not repo.rotate_refresh_token(user_id, dto.refresh_token, refresh):
                self.log.warning(
                    "auth.refresh.rejected", extra={"user_id": user_id, "reason": "lost_race"}
                )
                raise InvalidTokenError()

        self.log.info("auth.refresh", extra={"user_id": user_id})
        return TokenPairOut(access_token=access, refresh_token=refresh)

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, user_id: int) -> None:
        """
        Revoke the user's refresh token.

        Access tokens already issued stay valid until they expire.

        :param user_id: Authenticated user.
        :raises NotFoundError: If the user no longer exists.
        """
        with self.rw_uow() as uow:
            if not uow.users.clear_refresh_token(user_id):
                raise NotFoundError("User", user_id)

        self.log.info("auth.logout", extra={"user_id": user_id})
