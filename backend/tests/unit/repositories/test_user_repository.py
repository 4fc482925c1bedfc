"""Unit tests for :class:`UserRepository`."""

from __future__ import annotations

import pytest
from aquatrack.repositories.user import UserRepository, hash_token
from tests.factories.user import UserFactory


class TestUserRepository:
    """Lookup, authentication and refresh-token bookkeeping."""

    @pytest.fixture()
    def repo(self, session):
        return UserRepository(session=session)

    def test_get_by_email_is_case_insensitive(self, repo):
        user = UserFactory(email="alice@example.com")
        fetched = repo.get_by_email(" ALICE@example.com ")
        assert fetched is not None
        assert fetched.id == user.id

    def test_exists_by_email(self, repo):
        user = UserFactory(email="bob@example.com")

        assert repo.exists_by_email("bob@example.com")
        assert not repo.exists_by_email("nobody@example.com")
        assert not repo.exists_by_email("bob@example.com", exclude_id=user.id)

    def test_authenticate_valid_and_invalid(self, repo):
        user = UserFactory(email="auth@example.com", password="right")

        assert repo.authenticate("auth@example.com", "right").id == user.id
        assert repo.authenticate("auth@example.com", "wrong") is None
        assert repo.authenticate("ghost@example.com", "right") is None

    def test_refresh_token_is_stored_as_digest(self, repo):
        user = UserFactory()
        repo.save_refresh_token(user, "token-1")

        assert user.refresh_token_hash == hash_token("token-1")
        assert user.refresh_token_hash != "token-1"
        assert repo.refresh_token_matches(user, "token-1")
        assert not repo.refresh_token_matches(user, "token-2")

    def test_no_stored_token_matches_nothing(self, repo):
        user = UserFactory()
        assert not repo.refresh_token_matches(user, "anything")

    def test_rotate_only_succeeds_once(self, repo):
        """A second rotation presenting the same old token finds no row."""
        user = UserFactory()
        repo.save_refresh_token(user, "old")

        assert repo.rotate_refresh_token(user.id, "old", "new-a") is True
        assert repo.rotate_refresh_token(user.id, "old", "new-b") is False
        assert repo.refresh_token_matches(user, "new-a")

    def test_clear_refresh_token(self, repo):
        user = UserFactory()
        repo.save_refresh_token(user, "tok")

        assert repo.clear_refresh_token(user.id) is True
        assert user.refresh_token_hash is None
        assert repo.clear_refresh_token(user.id + 999) is False

    def test_update_ignores_session_fields(self, repo):
        user = UserFactory(name="Before")
        repo.assign_updates(user, {"name": "After", "refresh_token_hash": "x"}, strict=False)
        assert user.name == "After"
        assert user.refresh_token_hash is None

    def test_strict_update_rejects_password_hash(self, repo):
        user = UserFactory()
        with pytest.raises(ValueError, match="non-updatable"):
            repo.update(user, password_hash="plain")
