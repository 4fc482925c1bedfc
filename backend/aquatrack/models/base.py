"""Column and ``__repr__`` mixins shared by the mapped classes."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class PKMixin:
    """Integer surrogate key ``id``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class TimestampMixin:
    """Database-managed ``created_at`` / ``updated_at`` (timezone aware)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )


class ReprMixin:
    """``<ClassName id=1 attr=...>`` built from ``__repr_attrs__``.

    Secrets (password or token digests) must never be listed there.
    """

    __repr_attrs__: ClassVar[tuple[str, ...]] = ()

    def __repr__(self) -> str:
        parts = [f"id={getattr(self, 'id', None)}"]
        parts += [f"{name}={getattr(self, name, None)!r}" for name in self.__repr_attrs__]
        return f"<{type(self).__name__} {' '.join(parts)}>"
