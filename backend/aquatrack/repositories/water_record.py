"""Owner-scoped repository for water intake records."""

from __future__ import annotations

from typing import Any, NamedTuple

from sqlalchemy import func, select

from aquatrack.models.water_record import WaterRecord
from aquatrack.repositories.base import OwnedRepository


class DailyTotal(NamedTuple):
    """Aggregated intake of one calendar day."""

    date: str
    total_amount: int
    records_count: int


class WaterRecordRepository(OwnedRepository[WaterRecord]):
    """Persistence for :class:`WaterRecord`, always restricted to one owner.

    Day and month lookups are prefix matches on the stored ``time`` text
    (``"2024-05-01"`` or ``"2024-05"``); ``LIKE`` wildcards in the prefix are
    escaped.
    """

    model = WaterRecord

    def _updatable_fields(self):
        return {"time", "amount"}

    def list_by_time_prefix(self, prefix: str) -> list[WaterRecord]:
        """Return owned records whose ``time`` starts with ``prefix``, oldest first."""
        stmt = self._select().where(WaterRecord.time.startswith(prefix, autoescape=True))
        stmt = stmt.order_by(WaterRecord.time.asc(), WaterRecord.id.asc())
        return list(self.session.execute(stmt).scalars().all())

    def daily_totals(self, month: str) -> list[DailyTotal]:
        """Group the owner's records of ``month`` by calendar day.

        :param month: ``YYYY-MM`` prefix.
        :type month: str
        :returns: One row per day with records, ordered by date ascending.
        :rtype: list[DailyTotal]
        """
        day = func.substr(WaterRecord.time, 1, 10).label("day")
        stmt: Any = (
            select(
                day,
                func.sum(WaterRecord.amount).label("total_amount"),
                func.count(WaterRecord.id).label("records_count"),
            )
            .where(self._owner_column() == self.owner_id)
            .where(WaterRecord.time.startswith(month, autoescape=True))
            .group_by(day)
            .order_by(day.asc())
        )
        return [
            DailyTotal(
                date=row.day,
                total_amount=int(row.total_amount),
                records_count=int(row.records_count),
            )
            for row in self.session.execute(stmt)
        ]
