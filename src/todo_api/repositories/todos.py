"""Repository for interacting with todo persistence models."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any

import sqlalchemy as sa
from sqlalchemy import func
from sqlalchemy.orm import selectinload
from sqlmodel import select

from ..models import Todo
from .base import BaseRepository

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..services.queries import TodoQuery


class TodoRepository(BaseRepository[Todo]):
    """Concrete repository encapsulating ``Todo`` persistence operations."""

    model = Todo

    async def get_with_relations(self, todo_id: uuid.UUID) -> Todo | None:
        """Load a todo with its category and owner, bypassing stale identity-map state."""
        result = await self.session.execute(
            select(Todo)
            .where(Todo.id == todo_id)
            .options(selectinload(Todo.category), selectinload(Todo.user))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def list_paginated(self, query: "TodoQuery") -> tuple[list[Todo], int]:
        """Return one page of todos matching ``query`` along with the total count."""
        conditions: list[Any] = []
        if query.owner_id is not None:
            conditions.append(Todo.user_id == query.owner_id)
        if query.category_id is not None:
            conditions.append(Todo.category_id == query.category_id)
        if query.completed is not None:
            conditions.append(Todo.completed == query.completed)
        if query.search:
            conditions.append(Todo.title.icontains(query.search, autoescape=True))

        column = getattr(Todo, query.sort.value)
        if query.ascending:
            ordering = (column.asc(), Todo.id.asc())
        else:
            ordering = (column.desc(), Todo.id.desc())

        statement = (
            select(Todo)
            .where(*conditions)
            .order_by(*ordering)
            .limit(query.limit)
            .offset(query.offset)
        )
        result = await self.session.execute(statement)
        todos = list(result.scalars().all())

        count_statement = select(func.count()).select_from(Todo).where(*conditions)
        total_result = await self.session.execute(count_statement)
        total = int(total_result.scalar_one())
        return todos, total

    async def update(self, todo_id: uuid.UUID, changes: dict[str, Any]) -> Todo | None:
        """Apply ``changes`` with a single UPDATE and return the reloaded todo."""
        if changes:
            await self.session.execute(
                sa.update(Todo).where(Todo.id == todo_id).values(**changes)
            )
        return await self.get_with_relations(todo_id)

    async def detach_category(self, category_id: int) -> int:
        """Clear ``category_id`` on every todo referencing the category."""
        result = await self.session.execute(
            sa.update(Todo).where(Todo.category_id == category_id).values(category_id=None)
        )
        return result.rowcount or 0
