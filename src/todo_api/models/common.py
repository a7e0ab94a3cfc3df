"""Column helpers shared by every table."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp_field(**column_kwargs: Any) -> Any:
    return Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=sa.DateTime(timezone=True),
        sa_column_kwargs={"server_default": sa.func.now(), **column_kwargs},
    )


class TimestampMixin(SQLModel, table=False):
    """``created_at``/``updated_at`` in UTC; ``updated_at`` also moves on Core UPDATEs."""

    created_at: datetime = _timestamp_field()
    updated_at: datetime = _timestamp_field(onupdate=utcnow)


__all__ = ["TimestampMixin", "utcnow"]
