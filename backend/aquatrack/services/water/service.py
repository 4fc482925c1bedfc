"""
WaterService
============

Owner-scoped CRUD and aggregates over water intake records.

Times are local wall-clock strings (``YYYY-MM-DD HH:MM:SS``). Day and month
queries match on the textual prefix, so ``"2024-05-01"`` selects that day and
``"2024-05"`` the whole month.
"""

from __future__ import annotations

from datetime import datetime

from aquatrack.models.water_record import TIME_FORMAT, WaterRecord
from aquatrack.services._shared.base import BaseService
from aquatrack.services._shared.errors import NotFoundError
from aquatrack.services.water.dto import (
    DailyOut,
    DailyStatOut,
    MonthlyStatsOut,
    WaterCreateIn,
    WaterRecordOut,
    WaterUpdateIn,
)

DAY_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"
RECORD_ENTITY = "Water record"


def _now() -> datetime:
    return datetime.now()


class WaterService(BaseService):
    """Record store for the authenticated user's drinks."""

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def create(self, dto: WaterCreateIn) -> WaterRecordOut:
        """
        Store a new record, stamping local "now" when no time is given.

        :param dto: Creation input.
        :type dto: WaterCreateIn
        :returns: The stored record.
        :rtype: WaterRecordOut
        """
        time = dto.time or _now().strftime(TIME_FORMAT)
        with self.rw_uow() as uow:
            repo = uow.water_records(dto.owner_id)
            record = repo.add(WaterRecord(time=time, amount=dto.amount))
            out = WaterRecordOut.from_model(record)

        self.log.info("water.created", extra={"user_id": dto.owner_id, "record_id": out.id})
        return out

    def update(self, dto: WaterUpdateIn) -> WaterRecordOut:
        """
        Replace ``amount`` (and ``time`` when given) of an owned record.

        :param dto: Update input.
        :type dto: WaterUpdateIn
        :returns: The updated record.
        :rtype: WaterRecordOut
        :raises NotFoundError: When no record with that id belongs to the owner.
        """
        changes: dict[str, object] = {"amount": dto.amount}
        if dto.time:
            changes["time"] = dto.time

        with self.rw_uow() as uow:
            repo = uow.water_records(dto.owner_id)
            record = repo.get_for_update(dto.record_id)
            if record is None:
                raise NotFoundError(RECORD_ENTITY, dto.record_id)
            repo.update(record, **changes)
            out = WaterRecordOut.from_model(record)

        self.log.info("water.updated", extra={"user_id": dto.owner_id, "record_id": out.id})
        return out

    def delete(self, record_id: int, owner_id: int) -> None:
        """
        Remove an owned record.

        :raises NotFoundError: When no record with that id belongs to the owner.
        """
        with self.rw_uow() as uow:
            if not uow.water_records(owner_id).delete_by_id(record_id):
                raise NotFoundError(RECORD_ENTITY, record_id)

        self.log.info("water.deleted", extra={"user_id": owner_id, "record_id": record_id})

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #

    def get_by_day(self, owner_id: int, day: str | None = None) -> DailyOut:
        """
        Return the owner's records of ``day`` and their total volume.

        :param owner_id: Authenticated user.
        :type owner_id: int
        :param day: ``YYYY-MM-DD``; today when omitted.
        :type day: str | None
        :rtype: DailyOut
        """
        prefix = day or _now().strftime(DAY_FORMAT)
        with self.ro_uow() as uow:
            rows = uow.water_records(owner_id).list_by_time_prefix(prefix)
            records = [WaterRecordOut.from_model(r) for r in rows]
        return DailyOut(records=records, water_amount=sum(r.amount for r in records))

    def get_by_month(self, owner_id: int, month: str | None = None) -> list[WaterRecordOut]:
        """
        Return the owner's records of ``month`` (``YYYY-MM``, current month by default).
        """
        prefix = month or _now().strftime(MONTH_FORMAT)
        with self.ro_uow() as uow:
            rows = uow.water_records(owner_id).list_by_time_prefix(prefix)
            return [WaterRecordOut.from_model(r) for r in rows]

    def get_monthly_stats(self, owner_id: int, month: str | None = None) -> MonthlyStatsOut:
        """
        Aggregate the owner's records of ``month`` per day.

        :param owner_id: Authenticated user.
        :type owner_id: int
        :param month: ``YYYY-MM``; current month when omitted.
        :type month: str | None
        :returns: Daily breakdown plus month totals.
        :rtype: MonthlyStatsOut
        """
        prefix = month or _now().strftime(MONTH_FORMAT)
        with self.ro_uow() as uow:
            totals = uow.water_records(owner_id).daily_totals(prefix)

        daily = [
            DailyStatOut(date=t.date, total_amount=t.total_amount, records_count=t.records_count)
            for t in totals
        ]
        return MonthlyStatsOut(
            daily_stats=daily,
            total_amount=sum(d.total_amount for d in daily),
            total_records=sum(d.records_count for d in daily),
            days_tracked=len(daily),
        )
