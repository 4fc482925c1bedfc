"""Shared fixtures: one app per run, one rolled-back transaction per test.

Units of Work commit for real inside tests. Those commits only release
SAVEPOINTs nested in an outer transaction that is discarded afterwards, so
every test starts from empty tables.
"""

from __future__ import annotations

import os

import pytest
from aquatrack.core.config import TestingConfig
from aquatrack.core.extensions import db as _db
from aquatrack.factory import create_app
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker


class TestConfig(TestingConfig):
    """In-memory SQLite and quiet logs on top of :class:`TestingConfig`."""

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    LOG_LEVEL = "WARNING"


def _enable_sqlite_savepoints(engine) -> None:
    """Let SQLAlchemy, not pysqlite, emit BEGIN so SAVEPOINTs nest correctly."""

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):  # pragma: no cover - driver hook
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):  # pragma: no cover - driver hook
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def app():
    """The application under test, built once."""
    os.environ.pop("DATABASE_URL", None)
    application = create_app(TestConfig)
    application.logger.setLevel("WARNING")
    return application


@pytest.fixture(scope="session")
def db(app):
    """Schema created once; the app context stays pushed for the whole run.

    Services, the JWT adapter and the CLI all reach ``current_app`` through
    this context, and test-client requests reuse it.
    """
    with app.app_context():
        _enable_sqlite_savepoints(_db.engine)
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """The single connection every test session is bound to.

    ``:memory:`` databases live per connection, so all sessions must share it.
    """
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Scoped session installed as ``db.session`` for the duration of a test.

    ``join_transaction_mode="create_savepoint"`` turns every session-level
    commit or rollback into a SAVEPOINT operation inside ``outer``.
    """
    outer = connection.begin()
    scoped = scoped_session(
        sessionmaker(bind=connection, join_transaction_mode="create_savepoint")
    )

    previous = db.session
    db.session.remove()
    db.session = scoped
    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = previous
        outer.rollback()


@pytest.fixture()
def client(app, session):
    """Flask test client; its requests run against the test's session."""
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    from faker import Faker

    Faker.seed(1337)
    return Faker()


@pytest.fixture(autouse=True)
def _factories_session(session):
    """Point every factory at this test's session."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
