"""Water intake record model."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from aquatrack.core.extensions import db

from .base import PKMixin, ReprMixin

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class WaterRecord(PKMixin, ReprMixin, db.Model):
    """
    One drink logged by a user.

    Fields
    ------
    time : str
        Local wall-clock time formatted as ``YYYY-MM-DD HH:MM:SS``. Kept as
        text so day (``YYYY-MM-DD``) and month (``YYYY-MM``) lookups are plain
        prefix matches.
    amount : int
        Volume in millilitres, at least ``1``.
    owner_id : int
        Owning user. Records are never visible to other accounts.
    """

    __tablename__ = "water_records"
    __repr_attrs__ = ("time", "amount")

    time: Mapped[str] = mapped_column(String(19), nullable=False)
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"), nullable=False
    )

    owner = relationship("User", back_populates="water_records", lazy="select")

    __table_args__ = (
        CheckConstraint("amount >= 1", name="amount_positive"),
        Index("ix_water_records_owner_id_time", "owner_id", "time"),
    )

    @validates("amount")
    def _validate_amount(self, key: str, value: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError("amount must be a positive integer.")
        return value

    @validates("time")
    def _validate_time(self, key: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError("time is required.")
        return value.strip()
