"""Factory Boy base wiring shared by every model factory."""

from __future__ import annotations

import factory


class SQLAlchemySession:
    """Holder for the per-test session; set by the autouse fixture in ``conftest``."""

    _session = None

    @classmethod
    def set(cls, session):
        cls._session = session

    @classmethod
    def get(cls):
        if cls._session is None:
            raise RuntimeError("No factory session registered; request the 'session' fixture.")
        return cls._session


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Persist through the test session and commit after each build.

    The commit only releases a SAVEPOINT, so objects become visible to the
    Units of Work under test while the outer transaction still rolls back.
    """

    class Meta:
        abstract = True
        sqlalchemy_session_factory = SQLAlchemySession.get
        sqlalchemy_session_persistence = "commit"
