"""Strawberry object and input types mirroring the REST schemas."""

from __future__ import annotations

import dataclasses
import uuid
from datetime import datetime
from typing import Any, Optional

import strawberry
from strawberry import UNSET

from ..models import Category, Todo, User, UserRole
from ..schemas.todo import PaginationMeta


@strawberry.type
class UserType:
    id: int
    username: str
    email: str
    role: str
    created_at: datetime

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            role=UserRole(user.role).value,
            created_at=user.created_at,
        )


@strawberry.type
class CategoryType:
    id: int
    name: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, category: Category) -> "CategoryType":
        return cls(
            id=category.id,
            name=category.name,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


@strawberry.type
class TodoUserType:
    id: int
    username: str
    email: str


@strawberry.type
class TodoType:
    id: uuid.UUID
    title: str
    completed: bool
    due_date: Optional[datetime]
    user_id: int
    category_id: Optional[int]
    category: Optional[CategoryType]
    user: Optional[TodoUserType]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_model(cls, todo: Todo) -> "TodoType":
        return cls(
            id=todo.id,
            title=todo.title,
            completed=todo.completed,
            due_date=todo.due_date,
            user_id=todo.user_id,
            category_id=todo.category_id,
            category=CategoryType.from_model(todo.category) if todo.category is not None else None,
            user=(
                TodoUserType(id=todo.user.id, username=todo.user.username, email=todo.user.email)
                if todo.user is not None
                else None
            ),
            created_at=todo.created_at,
            updated_at=todo.updated_at,
        )


@strawberry.type
class PaginationMetaType:
    total: int
    count: int
    limit: int
    pages: int
    current_page: int

    @classmethod
    def from_schema(cls, meta: PaginationMeta) -> "PaginationMetaType":
        return cls(**meta.model_dump())


@strawberry.type
class TodoPage:
    data: list[TodoType]
    meta: PaginationMetaType


@strawberry.input
class AddTodoInput:
    title: str
    category_id: Optional[int] = UNSET
    due_date: Optional[datetime] = UNSET


@strawberry.input
class UpdateTodoInput:
    """Fields left out are not touched; ``null`` clears category and due date."""

    title: Optional[str] = UNSET
    completed: Optional[bool] = UNSET
    category_id: Optional[int] = UNSET
    due_date: Optional[datetime] = UNSET


def provided_fields(value: Any) -> dict[str, Any]:
    """Return the input fields the client actually sent, explicit nulls included."""
    return {
        field.name: getattr(value, field.name)
        for field in dataclasses.fields(value)
        if getattr(value, field.name) is not UNSET
    }


__all__ = [
    "AddTodoInput",
    "CategoryType",
    "PaginationMetaType",
    "TodoPage",
    "TodoType",
    "TodoUserType",
    "UpdateTodoInput",
    "UserType",
    "provided_fields",
]
