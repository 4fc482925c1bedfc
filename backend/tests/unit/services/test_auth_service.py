"""Unit tests for :class:`AuthService` session lifecycle."""

from __future__ import annotations

from datetime import timedelta

import pytest
from aquatrack.models.user import User
from aquatrack.repositories.user import hash_token
from aquatrack.services._shared.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
    PasswordMismatchError,
)
from aquatrack.services.auth.dto import LoginIn, RefreshIn, RegisterIn
from aquatrack.services.auth.service import AuthService
from freezegun import freeze_time
from tests.factories.user import UserFactory


# ------------------------------ Fixtures ---------------------------------- #
@pytest.fixture()
def service() -> AuthService:
    """AuthService wired to the real JWT adapter."""
    return AuthService()


# -------------------------------- Register --------------------------------- #
class TestRegister:
    def test_creates_user_with_defaults(self, service, session):
        out = service.register(
            RegisterIn(email="  New.User@Example.COM ", password="pw-123", repeat_password="pw-123")
        )

        assert out.email == "new.user@example.com"
        user = session.get(User, out.id)
        assert user is not None
        assert user.name == "User"
        assert user.gender == "undefined"
        assert user.daily_norm == 2000.0
        assert user.refresh_token_hash is None
        assert user.verify_password("pw-123")
        assert user.password_hash != "pw-123"

    def test_password_mismatch_creates_nothing(self, service, session):
        with pytest.raises(PasswordMismatchError):
            service.register(
                RegisterIn(email="m@example.com", password="one", repeat_password="two")
            )
        assert session.query(User).filter_by(email="m@example.com").count() == 0

    def test_duplicate_email_is_rejected(self, service):
        UserFactory(email="taken@example.com")
        with pytest.raises(DuplicateEmailError):
            service.register(
                RegisterIn(email="TAKEN@example.com", password="pw", repeat_password="pw")
            )


# --------------------------------- Login ----------------------------------- #
class TestLogin:
    def test_issues_pair_and_stores_refresh_digest(self, service, session):
        user = UserFactory(email="a@example.com", password="x")

        out = service.login(LoginIn(email="a@example.com", password="x"))

        assert out.access_token and out.refresh_token
        assert out.user.id == user.id
        assert out.user.email == "a@example.com"
        session.refresh(user)
        assert user.refresh_token_hash == hash_token(out.refresh_token)
        assert service.tokens.validate_access_token(out.access_token) == user.id

    @pytest.mark.parametrize(
        ("email", "password"),
        [("a@example.com", "wrong"), ("missing@example.com", "x")],
    )
    def test_invalid_credentials(self, service, email, password):
        """Unknown email and wrong password fail the same way."""
        UserFactory(email="a@example.com", password="x")
        with pytest.raises(InvalidCredentialsError):
            service.login(LoginIn(email=email, password=password))

    def test_new_login_replaces_previous_session(self, service):
        user = UserFactory(password="x")
        first = service.login(LoginIn(email=user.email, password="x"))
        service.login(LoginIn(email=user.email, password="x"))

        with pytest.raises(InvalidTokenError):
            service.refresh(RefreshIn(refresh_token=first.refresh_token))


# -------------------------------- Refresh ---------------------------------- #
class TestRefresh:
    def test_rotates_and_blocks_reuse(self, service, session):
        """The first refresh rotates; the old token is no longer accepted."""
        user = UserFactory(password="x")
        pair1 = service.login(LoginIn(email=user.email, password="x"))

        pair2 = service.refresh(RefreshIn(refresh_token=pair1.refresh_token))
        assert pair2.refresh_token != pair1.refresh_token
        session.refresh(user)
        assert user.refresh_token_hash == hash_token(pair2.refresh_token)

        with pytest.raises(InvalidTokenError):
            service.refresh(RefreshIn(refresh_token=pair1.refresh_token))

        # The rotated token keeps working
        pair3 = service.refresh(RefreshIn(refresh_token=pair2.refresh_token))
        assert pair3.refresh_token != pair2.refresh_token

    def test_expired_refresh_token_is_accepted_while_current(self, service):
        user = UserFactory(password="x")
        with freeze_time("2024-05-01 08:00:00") as frozen:
            pair = service.login(LoginIn(email=user.email, password="x"))
            frozen.tick(timedelta(days=60))
            out = service.refresh(RefreshIn(refresh_token=pair.refresh_token))
        assert out.access_token

    def test_malformed_token_is_rejected(self, service):
        with pytest.raises(InvalidTokenError):
            service.refresh(RefreshIn(refresh_token="garbage"))

    def test_token_for_deleted_user_is_rejected(self, service, session):
        user = UserFactory(password="x")
        token = service.tokens.issue_refresh_token(user.id + 1000)
        with pytest.raises(InvalidTokenError):
            service.refresh(RefreshIn(refresh_token=token))

    def test_profile_is_untouched(self, service, session):
        user = UserFactory(password="x", name="Ann", daily_norm=1800.0)
        pair = service.login(LoginIn(email=user.email, password="x"))
        service.refresh(RefreshIn(refresh_token=pair.refresh_token))
        session.refresh(user)
        assert (user.name, user.daily_norm) == ("Ann", 1800.0)


# --------------------------------- Logout ---------------------------------- #
class TestLogout:
    def test_clears_refresh_session(self, service, session):
        user = UserFactory(password="x")
        pair = service.login(LoginIn(email=user.email, password="x"))

        service.logout(user.id)

        session.refresh(user)
        assert user.refresh_token_hash is None
        with pytest.raises(InvalidTokenError):
            service.refresh(RefreshIn(refresh_token=pair.refresh_token))

    def test_access_token_outlives_logout(self, service):
        user = UserFactory(password="x")
        pair = service.login(LoginIn(email=user.email, password="x"))
        service.logout(user.id)
        assert service.tokens.validate_access_token(pair.access_token) == user.id

    def test_unknown_user(self, service):
        with pytest.raises(NotFoundError):
            service.logout(999_999)
