"""Column and repr mixins shared by ``Member`` and ``Post``."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from sqlalchemy import DateTime, Integer, func
from sqlalchemy.orm import Mapped, mapped_column


class PKMixin:
    """Internal integer key. Never exposed through the API; members are
    addressed by ``uuid`` and posts by ``slug``."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True)


class TimestampMixin:
    """Server-side ``created_at`` / ``updated_at`` columns.

    ``updated_at`` moves on ORM-level updates only. The view counter is bumped
    with a Core ``UPDATE`` that sets it back to its current value, so reads
    never look like edits.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class ReprMixin:
    """``<Model key=value>`` using the public key named by ``__repr_key__``."""

    __repr_key__: ClassVar[str] = "id"

    def __repr__(self) -> str:
        key = self.__repr_key__
        return f"<{type(self).__name__} {key}={getattr(self, key, None)!r}>"
