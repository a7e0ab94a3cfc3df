"""Service layer encapsulating todo operations."""

from __future__ import annotations

import logging
import uuid

from sqlmodel.ext.asyncio.session import AsyncSession

from ..errors import BadRequestError, NotFoundError
from ..models import Todo
from ..repositories import CategoryRepository, TodoRepository
from ..schemas.todo import PaginationMeta, TodoCreate, TodoUpdate
from .policy import Principal, ensure_can_access
from .queries import TodoQuery, build_pagination

logger = logging.getLogger(__name__)


class TodoService:
    """High-level business orchestration for ``Todo`` entities.

    Item operations confirm the todo exists (404) before the access policy
    runs (403).
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._repository = TodoRepository(session)
        self._category_repository = CategoryRepository(session)

    async def _ensure_category_exists(self, category_id: int | None) -> None:
        if category_id is None:
            return
        if not await self._category_repository.exists(category_id):
            raise BadRequestError("Category does not exist")

    async def _get_accessible(self, todo_id: uuid.UUID, principal: Principal) -> Todo:
        todo = await self._repository.get(todo_id)
        if todo is None:
            raise NotFoundError("Todo not found")
        ensure_can_access(todo.user_id, principal)
        return todo

    async def list_todos(self, query: TodoQuery) -> tuple[list[Todo], PaginationMeta]:
        todos, total = await self._repository.list_paginated(query)
        return todos, build_pagination(total, len(todos), query)

    async def get_todo(self, todo_id: uuid.UUID, principal: Principal) -> Todo:
        return await self._get_accessible(todo_id, principal)

    async def create_todo(self, principal: Principal, payload: TodoCreate) -> Todo:
        """Create a todo owned by ``principal``."""
        await self._ensure_category_exists(payload.category_id)
        todo = Todo(
            title=payload.title,
            category_id=payload.category_id,
            due_date=payload.due_date,
            user_id=principal.id,
        )
        await self._repository.save(todo)
        await self._session.commit()
        created = await self._repository.get_with_relations(todo.id)
        logger.info("Todo created", extra={"todo_id": str(todo.id), "user_id": principal.id})
        return created or todo

    async def update_todo(self, todo_id: uuid.UUID, principal: Principal, payload: TodoUpdate) -> Todo:
        """Apply the fields present in ``payload``; ownership never changes."""
        await self._get_accessible(todo_id, principal)
        changes = payload.changes()
        if "category_id" in changes:
            await self._ensure_category_exists(changes["category_id"])
        updated = await self._repository.update(todo_id, changes)
        await self._session.commit()
        if updated is None:  # pragma: no cover - deleted between check and write
            raise NotFoundError("Todo not found")
        logger.info(
            "Todo updated",
            extra={"todo_id": str(todo_id), "user_id": principal.id, "fields": sorted(changes)},
        )
        return updated

    async def toggle_todo(self, todo_id: uuid.UUID, principal: Principal) -> Todo:
        """Flip ``completed``."""
        todo = await self._get_accessible(todo_id, principal)
        updated = await self._repository.update(todo_id, {"completed": not todo.completed})
        await self._session.commit()
        if updated is None:  # pragma: no cover - deleted between check and write
            raise NotFoundError("Todo not found")
        logger.info(
            "Todo toggled",
            extra={"todo_id": str(todo_id), "user_id": principal.id, "completed": updated.completed},
        )
        return updated

    async def delete_todo(self, todo_id: uuid.UUID, principal: Principal) -> None:
        todo = await self._get_accessible(todo_id, principal)
        await self._repository.remove(todo)
        await self._session.commit()
        logger.info("Todo deleted", extra={"todo_id": str(todo_id), "user_id": principal.id})


__all__ = ["TodoService"]
