# aquatrack/services/_shared/base.py
from __future__ import annotations

import logging

from aquatrack.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Expose a per-service logger for lifecycle events.
    * Keep services thin, orchestration-only, no web/ORM leakage.

    Notes
    -----
    - Services never touch the global session directly; they use a Unit of Work.
    - Service errors are translated to HTTP in ``aquatrack.core.errors``.
    - Log events carry ids only; passwords, hashes and tokens are never logged.
    """

    def __init__(self) -> None:
        self.log = logging.getLogger(type(self).__module__)

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """
        Create a read-write Unit of Work.

        :returns: Read-write UoW instance.
        :rtype: SQLAlchemyUnitOfWork
        """
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """
        Create a read-only Unit of Work.

        :returns: Read-only UoW instance.
        :rtype: SQLAlchemyReadOnlyUnitOfWork
        """
        return SQLAlchemyReadOnlyUnitOfWork()
