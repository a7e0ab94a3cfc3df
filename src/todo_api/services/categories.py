"""Service layer for categories."""

from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import NotFoundError
from ..models import Category
from ..repositories import CategoryRepository, TodoRepository

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = CategoryRepository(session)
        self._todo_repository = TodoRepository(session)

    async def list_categories(self) -> list[Category]:
        """Return all categories, newest first."""
        return await self._repository.list_recent()

    async def get_category(self, category_id: int) -> Category:
        category = await self._repository.get(category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def create_category(self, *, name: str) -> Category:
        category = Category(name=name)
        await self._repository.save(category)
        await self._session.commit()
        await self._repository.reload(category)
        logger.info("Category created", extra={"category_id": category.id})
        return category

    async def update_category(self, category_id: int, *, name: str) -> Category:
        category = await self.get_category(category_id)
        category.name = name
        await self._session.commit()
        await self._repository.reload(category)
        logger.info("Category updated", extra={"category_id": category.id})
        return category

    async def delete_category(self, category_id: int) -> None:
        """Delete a category; todos that referenced it become uncategorised."""
        category = await self.get_category(category_id)
        detached = await self._todo_repository.detach_category(category_id)
        await self._repository.remove(category)
        await self._session.commit()
        logger.info(
            "Category deleted",
            extra={"category_id": category_id, "detached_todos": detached},
        )


__all__ = ["CategoryService"]
