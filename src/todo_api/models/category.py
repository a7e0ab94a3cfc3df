"""Todo categories."""

from __future__ import annotations

import sqlalchemy as sa
from sqlmodel import Field

from .common import TimestampMixin


class Category(TimestampMixin, table=True):
    __tablename__ = "categories"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(
        max_length=100,
        sa_column=sa.Column(sa.String(length=100), nullable=False),
    )


__all__ = ["Category"]
