"""Tests for the read-write Unit of Work."""

from __future__ import annotations

import pytest
from aquatrack.models.user import User
from aquatrack.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork


def test_commits_on_success(session):
    with SQLAlchemyUnitOfWork() as uow:
        uow.users.add(User(email="rw@example.com", password="x"))

    assert session.query(User).filter_by(email="rw@example.com").count() == 1


def test_rolls_back_on_error(session):
    with pytest.raises(RuntimeError):
        with SQLAlchemyUnitOfWork() as uow:
            uow.users.add(User(email="boom@example.com", password="x"))
            raise RuntimeError("boom")

    assert session.query(User).filter_by(email="boom@example.com").count() == 0
