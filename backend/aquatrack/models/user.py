"""User account model for the water tracking app."""

from __future__ import annotations

from typing import Any

from sqlalchemy import Float, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates
from werkzeug.security import check_password_hash, generate_password_hash

from aquatrack.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

DEFAULT_NAME = "User"
DEFAULT_GENDER = "undefined"
DEFAULT_DAILY_NORM = 2000.0


class User(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Account identity plus the hydration profile of its owner.

    Fields
    ------
    email : str
        Login email. Stored normalized (lowercase, trimmed) and unique.
    password_hash : str
        Salted hash (write-only setter via ``password``).
    name : str
        Display name, ``"User"`` unless provided.
    gender : str
        Free-form tag, ``"undefined"`` unless provided.
    daily_norm : float
        Daily intake goal in millilitres.
    weight : float
        Body weight; ``0`` when unknown.
    time_active : float
        Daily active time; ``0`` when unknown.
    avatar_url : str | None
        Optional picture location.
    refresh_token_hash : str | None
        SHA-256 hex digest of the single refresh token currently accepted for
        this account. ``None`` once logged out.
    """

    __tablename__ = "users"
    __repr_attrs__ = ("email",)

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(254), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default=DEFAULT_NAME)
    gender: Mapped[str] = mapped_column(String(20), nullable=False, default=DEFAULT_GENDER)
    daily_norm: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_DAILY_NORM)
    weight: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    time_active: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    refresh_token_hash: Mapped[str | None] = mapped_column(String(64), nullable=True)

    water_records = relationship(
        "WaterRecord",
        back_populates="owner",
        lazy="select",
        passive_deletes=True,
    )

    __table_args__ = (UniqueConstraint("email", name="uq_users_email"),)

    # -------------------- Password API --------------------
    @property
    def password(self) -> Any:  # pragma: no cover - explicit write-only contract
        """
        Disallow reading passwords.

        :raises AttributeError: Always, to ensure password is write-only.
        """
        raise AttributeError("Password is write-only.")

    @password.setter
    def password(self, raw: str) -> None:
        """
        Hash and set the password.

        :param raw: Plain text password to hash.
        :type raw: str
        """
        if not isinstance(raw, str) or not raw:
            raise ValueError("Password must be a non-empty string.")
        self.password_hash = generate_password_hash(raw)

    def verify_password(self, raw: str) -> bool:
        """
        Verify a password against the stored hash.

        :param raw: Plain text password candidate.
        :type raw: str
        :returns: ``True`` if it matches; otherwise ``False``.
        :rtype: bool
        """
        if not self.password_hash:
            return False
        return bool(check_password_hash(self.password_hash, raw))

    # -------------------- Validators --------------------
    @validates("email")
    def _normalize_email(self, key: str, value: str) -> str:
        """
        Normalize and validate email.

        :raises ValueError: If email is missing or malformed.
        """
        if not value or not isinstance(value, str):
            raise ValueError("Email is required.")
        v = value.strip().lower()
        # Minimal sanity check; full validation happens at API layer.
        if "@" not in v or "." not in v.split("@")[-1]:
            raise ValueError("Email format looks invalid.")
        return v

    @validates("daily_norm", "weight", "time_active")
    def _non_negative(self, key: str, value: float) -> float:
        if value is None or float(value) < 0:
            raise ValueError(f"{key} must be a non-negative number.")
        return float(value)
