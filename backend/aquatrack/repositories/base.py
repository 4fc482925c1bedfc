"""Repository base classes shared by the user and water-record repositories.

Repositories are persistence-only: they stage, load and flush entities but
never commit or roll back. Units of Work own the transaction.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, cast

from sqlalchemy import Select, delete, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from aquatrack.core.extensions import db

E = TypeVar("E")  # SQLAlchemy mapped entity type


class BaseRepository(Generic[E]):
    """Persistence helpers for a single mapped class.

    Subclasses set ``model`` and may whitelist assignable keys through
    :meth:`_updatable_fields`; with no whitelist every update is refused.
    """

    #: SQLAlchemy mapped model (must be set by subclasses)
    model: type[E]

    def __init__(self, session: Session | None = None) -> None:
        self._session: Session | None = session

    @property
    def session(self) -> Session:
        """Return the injected session, or the Flask-scoped one."""
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    def _pk(self) -> InstrumentedAttribute[Any]:
        pk = getattr(self.model, "id", None)
        if pk is None:
            raise RuntimeError(f"{self.model.__name__} has no 'id' column to look up by.")
        return cast(InstrumentedAttribute[Any], pk)

    def _updatable_fields(self) -> set[str]:
        return set()

    def _select(self) -> Select[Any]:
        return select(self.model)

    # --------------------------------- CRUD ----------------------------------

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is assigned."""
        self.session.add(instance)
        self.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        stmt = self._select().where(self._pk() == entity_id)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def get_for_update(self, entity_id: Any) -> E | None:
        """Like :meth:`get` but with ``SELECT ... FOR UPDATE`` where supported."""
        stmt = self._select().where(self._pk() == entity_id).with_for_update()
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def flush(self) -> None:
        self.session.flush()

    # ----------------------------- Safe updates -------------------------------

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        strict: bool = True,
        flush: bool = True,
    ) -> E:
        """Copy whitelisted ``fields`` onto ``instance``.

        Assignment goes through ``setattr`` so the model's ``@validates`` hooks
        run.

        :param instance: Entity to mutate.
        :type instance: E
        :param fields: Keys and new values.
        :type fields: Mapping[str, Any]
        :param strict: Raise ``ValueError`` on keys outside the whitelist
            instead of dropping them.
        :type strict: bool
        :param flush: Flush the session afterwards.
        :type flush: bool
        :returns: The mutated instance.
        :rtype: E
        :raises ValueError: When ``strict`` and a key is not updatable.
        """
        allowed = self._updatable_fields()
        rejected = sorted(k for k in fields if k not in allowed)
        if rejected and strict:
            raise ValueError(f"Unknown or non-updatable fields: {rejected}")

        for key, value in fields.items():
            if key in allowed:
                setattr(instance, key, value)
        if flush:
            self.flush()
        return instance

    def update(self, instance: E, **fields: Any) -> E:
        return self.assign_updates(instance, fields)


class OwnedRepository(BaseRepository[E]):
    """Repository for rows that belong to exactly one user.

    Every lookup is filtered on the owner column, so a foreign row behaves
    exactly like a missing one.
    """

    owner_attr: str = "owner_id"

    def __init__(self, owner_id: int, session: Session | None = None) -> None:
        super().__init__(session=session)
        self.owner_id = owner_id

    def _owner_column(self) -> InstrumentedAttribute[Any]:
        return cast(InstrumentedAttribute[Any], getattr(self.model, self.owner_attr))

    def _select(self) -> Select[Any]:
        return select(self.model).where(self._owner_column() == self.owner_id)

    def add(self, instance: E) -> E:
        """Stamp the owner on ``instance`` before persisting it."""
        setattr(instance, self.owner_attr, self.owner_id)
        return super().add(instance)

    def delete_by_id(self, entity_id: Any) -> bool:
        """Delete the owned row with ``entity_id``.

        :returns: ``True`` when a row was removed, ``False`` for a missing id
            or a foreign owner.
        :rtype: bool
        """
        stmt = (
            delete(self.model)
            .where(self._pk() == entity_id, self._owner_column() == self.owner_id)
            .execution_options(synchronize_session="evaluate")
        )
        return self.session.execute(stmt).rowcount == 1
