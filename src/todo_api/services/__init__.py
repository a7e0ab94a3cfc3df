"""Service layer exports."""

from __future__ import annotations

from .auth import AuthService
from .categories import CategoryService
from .inputs import parse_todo_input
from .policy import Principal, can_access, ensure_can_access
from .queries import SortOrder, TodoQuery, TodoSortField, build_pagination, shape_todo_query
from .todos import TodoService
from .users import UserService

__all__ = [
    "AuthService",
    "CategoryService",
    "Principal",
    "SortOrder",
    "TodoQuery",
    "TodoService",
    "TodoSortField",
    "UserService",
    "build_pagination",
    "can_access",
    "ensure_can_access",
    "parse_todo_input",
    "shape_todo_query",
]
