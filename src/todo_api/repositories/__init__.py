"""Repository layer abstractions."""

from __future__ import annotations

from .base import BaseRepository
from .categories import CategoryRepository
from .todos import TodoRepository
from .users import UserRepository

__all__ = ["BaseRepository", "CategoryRepository", "TodoRepository", "UserRepository"]
