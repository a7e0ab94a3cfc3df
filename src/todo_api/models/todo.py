"""Todo items owned by a single user."""

# Relationship targets are resolved from ``Optional["..."]`` forward
# references, so this module keeps runtime annotations.

import uuid
from datetime import datetime
from typing import Optional

import sqlalchemy as sa
from sqlmodel import Field, Relationship

from .category import Category
from .common import TimestampMixin
from .user import User


class Todo(TimestampMixin, table=True):
    """Persistent todo model.

    ``user_id`` is fixed at creation; deleting the owner cascades, deleting
    the category clears ``category_id``.
    """

    __tablename__ = "todos"
    __table_args__ = (
        sa.Index("ix_todos_user_id", "user_id"),
        sa.Index("ix_todos_category_id", "category_id"),
        sa.Index("ix_todos_completed", "completed"),
    )

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    title: str = Field(
        max_length=120,
        sa_column=sa.Column(sa.String(length=120), nullable=False),
    )
    completed: bool = Field(
        default=False,
        sa_column=sa.Column(sa.Boolean(), nullable=False, server_default=sa.false()),
    )
    due_date: Optional[datetime] = Field(
        default=None,
        sa_column=sa.Column(sa.DateTime(timezone=True), nullable=True),
    )
    user_id: int = Field(
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    category_id: Optional[int] = Field(
        default=None,
        sa_column=sa.Column(
            sa.Integer(),
            sa.ForeignKey("categories.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )

    user: Optional["User"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    category: Optional["Category"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


__all__ = ["Todo"]
