"""Repository for categories."""

from __future__ import annotations

from ..models import Category
from .base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    model = Category

    async def list_recent(self) -> list[Category]:
        """Return every category, newest first."""
        return await self.all(Category.created_at.desc(), Category.id.desc())
