"""Todo payloads: full and partial write models plus read models."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    StrictBool,
    StringConstraints,
    ValidationInfo,
    field_validator,
    model_validator,
)

from .category import CategorySummary
from .user import UserSummary

TodoTitle = Annotated[str, StringConstraints(strip_whitespace=True, min_length=2, max_length=120)]

TODO_READ_EXAMPLE = {
    "id": "7b0f6d0e-3a53-4c47-9a55-0f1f6b3d8a21",
    "title": "Prepare sprint demo",
    "completed": False,
    "due_date": "2024-05-01T09:00:00Z",
    "user_id": 2,
    "category_id": 1,
    "category": {"id": 1, "name": "Work"},
    "user": {"id": 2, "username": "johndoe", "email": "john.doe@example.com"},
    "created_at": "2024-04-20T12:00:00Z",
    "updated_at": "2024-04-20T12:00:00Z",
}


class TodoCreate(BaseModel):
    """Full payload for creating a todo. Todos always start incomplete."""

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "title": "Prepare sprint demo",
                "category_id": 1,
                "due_date": "2024-05-01T09:00:00Z",
            }
        },
    )

    title: TodoTitle
    category_id: PositiveInt | None = None
    due_date: datetime | None = None


class TodoUpdate(BaseModel):
    """Partial payload; only the fields present are applied.

    ``category_id`` and ``due_date`` may be sent as ``null`` to clear them,
    ``title`` and ``completed`` may not.
    """

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={"example": {"title": "Prepare sprint demo v2", "completed": True}},
    )

    title: TodoTitle | None = None
    completed: StrictBool | None = None
    category_id: PositiveInt | None = None
    due_date: datetime | None = None

    @field_validator("title", "completed", mode="before")
    @classmethod
    def _reject_null(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value

    @model_validator(mode="after")
    def _ensure_payload_not_empty(self) -> "TodoUpdate":
        if not self.model_fields_set:
            raise ValueError("Provide at least one field to update")
        return self

    def changes(self) -> dict[str, Any]:
        """Return the normalized field set: absent fields out, explicit nulls kept."""
        return self.model_dump(exclude_unset=True)


class TodoRead(BaseModel):
    """Public representation of a todo."""

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        json_schema_extra={"example": TODO_READ_EXAMPLE},
    )

    id: UUID
    title: str
    completed: bool
    due_date: datetime | None = None
    user_id: int
    category_id: int | None = None
    category: CategorySummary | None = None
    user: UserSummary | None = None
    created_at: datetime
    updated_at: datetime


class PaginationMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    total: int = Field(ge=0)
    count: int = Field(ge=0)
    limit: int = Field(ge=1)
    pages: int = Field(ge=1)
    current_page: int = Field(ge=1)


class TodoListResponse(BaseModel):
    """Paginated collection of todos."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "data": [TODO_READ_EXAMPLE],
                "meta": {"total": 1, "count": 1, "limit": 10, "pages": 1, "current_page": 1},
            }
        }
    )

    data: list[TodoRead]
    meta: PaginationMeta


__all__ = [
    "PaginationMeta",
    "TodoCreate",
    "TodoListResponse",
    "TodoRead",
    "TodoUpdate",
]
