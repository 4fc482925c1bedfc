"""Units of Work over the Flask-SQLAlchemy scoped session."""

from __future__ import annotations

from sqlalchemy import event
from sqlalchemy.orm import Session, scoped_session

from aquatrack.core.extensions import db
from aquatrack.repositories import UserRepository, WaterRecordRepository
from aquatrack.uow.base import UnitOfWork


class SQLAlchemyRepositoryContainer:
    """Provide repository instances that share a SQLAlchemy session."""

    def __init__(self, *, session: Session) -> None:
        self.session = session
        self.users = UserRepository(session=self.session)

    def water_records(self, owner_id: int) -> WaterRecordRepository:
        """Return the record repository scoped to ``owner_id``."""
        return WaterRecordRepository(owner_id, session=self.session)


class SQLAlchemyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-write UoW: commits when the block exits cleanly, rolls back otherwise.

    Every repository it hands out shares ``db.session``, so a service's
    writes land in one transaction.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except Exception:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class SQLAlchemyReadOnlyUnitOfWork(SQLAlchemyRepositoryContainer, UnitOfWork):
    """
    Read-only Unit of Work backed by the Flask-scoped SQLAlchemy session.

    This UoW:
    - Blocks ORM flushes that carry new, dirty or deleted objects.
    - Rolls back on exit when it opened the transaction itself; an outer
      transaction (e.g. a test fixture) is left untouched.
    - Disallows ``commit()``.

    Results must be copied into DTOs before leaving the ``with`` block: the
    closing rollback expires loaded instances.
    """

    def __init__(self) -> None:
        super().__init__(session=db.session)
        self._owns_transaction = False
        self._guarded: Session | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        # ``db.session`` is a registry; events and transaction state live on
        # the Session it hands out
        target = self.session
        if isinstance(target, scoped_session):
            target = target()
        self._owns_transaction = not target.in_transaction()
        event.listen(target, "before_flush", _block_flush)
        self._guarded = target
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._owns_transaction:
                self.session.rollback()
        finally:
            if self._guarded is not None:
                event.remove(self._guarded, "before_flush", _block_flush)
                self._guarded = None

    def commit(self) -> None:
        """
        Disallow commit in read-only Unit of Work.

        :raises RuntimeError: always, to prevent accidental writes.
        """
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()


def _block_flush(session, flush_context, instances) -> None:
    if session.new or session.dirty or session.deleted:
        raise RuntimeError(
            "Read-only UnitOfWork: ORM flush blocked (new/dirty/deleted objects present)."
        )
