# aquatrack/services/water/dto.py
from __future__ import annotations

from dataclasses import dataclass

from aquatrack.models.water_record import WaterRecord

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class WaterCreateIn:
    """
    Input DTO for logging a drink.

    :param owner_id: Authenticated user.
    :type owner_id: int
    :param amount: Volume in millilitres (``>= 1``).
    :type amount: int
    :param time: ``YYYY-MM-DD HH:MM:SS``; local "now" when omitted.
    :type time: str | None
    """

    owner_id: int
    amount: int
    time: str | None = None


@dataclass(frozen=True, slots=True)
class WaterUpdateIn:
    """
    Input DTO for editing a record.

    :param record_id: Record to change.
    :type record_id: int
    :param owner_id: Authenticated user; must own the record.
    :type owner_id: int
    :param amount: New volume.
    :type amount: int
    :param time: New timestamp, or ``None`` to keep the stored one.
    :type time: str | None
    """

    record_id: int
    owner_id: int
    amount: int
    time: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class WaterRecordOut:
    id: int
    time: str
    amount: int

    @classmethod
    def from_model(cls, record: WaterRecord) -> WaterRecordOut:
        return cls(id=record.id, time=record.time, amount=record.amount)


@dataclass(frozen=True, slots=True)
class DailyOut:
    """
    Records of one day plus their summed volume.

    :param records: Records ordered by time.
    :type records: list[WaterRecordOut]
    :param water_amount: Sum of ``amount`` over ``records``.
    :type water_amount: int
    """

    records: list[WaterRecordOut]
    water_amount: int


@dataclass(frozen=True, slots=True)
class DailyStatOut:
    date: str
    total_amount: int
    records_count: int


@dataclass(frozen=True, slots=True)
class MonthlyStatsOut:
    """
    Monthly aggregate.

    :param daily_stats: One entry per day with records, by date ascending.
    :type daily_stats: list[DailyStatOut]
    :param total_amount: Sum of the daily totals.
    :type total_amount: int
    :param total_records: Number of records in the month.
    :type total_records: int
    :param days_tracked: Number of distinct days with records.
    :type days_tracked: int
    """

    daily_stats: list[DailyStatOut]
    total_amount: int
    total_records: int
    days_tracked: int
