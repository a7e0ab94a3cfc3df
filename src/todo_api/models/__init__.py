"""Domain models."""

from __future__ import annotations

from .category import Category
from .common import TimestampMixin, utcnow
from .todo import Todo
from .user import User, UserBase, UserRole

__all__ = [
    "Category",
    "TimestampMixin",
    "Todo",
    "User",
    "UserBase",
    "UserRole",
    "utcnow",
]
