"""Pydantic schemas for public interfaces."""

from __future__ import annotations

from .auth import LoginRequest, LoginResponse, RegisterRequest, TokenPayload
from .category import CategoryCreate, CategoryRead, CategorySummary, CategoryUpdate
from .system import ErrorResponse, FieldErrorSchema, HealthCheckResponse, RootResponse
from .todo import PaginationMeta, TodoCreate, TodoListResponse, TodoRead, TodoUpdate
from .user import UserPublic, UserSummary

__all__ = [
    "CategoryCreate",
    "CategoryRead",
    "CategorySummary",
    "CategoryUpdate",
    "ErrorResponse",
    "FieldErrorSchema",
    "HealthCheckResponse",
    "LoginRequest",
    "LoginResponse",
    "PaginationMeta",
    "RegisterRequest",
    "RootResponse",
    "TodoCreate",
    "TodoListResponse",
    "TodoRead",
    "TodoUpdate",
    "TokenPayload",
    "UserPublic",
    "UserSummary",
]
