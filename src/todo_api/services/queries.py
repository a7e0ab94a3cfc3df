"""Turn raw list parameters into a normalized, storage-agnostic todo query."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import BadRequestError
from ..schemas.todo import PaginationMeta
from .policy import Principal

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


class TodoSortField(str, Enum):
    """Columns a todo list may be ordered by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"
    DUE_DATE = "due_date"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True, slots=True)
class TodoQuery:
    """Filters, ordering and window for one page of todos."""

    owner_id: int | None
    category_id: int | None
    completed: bool | None
    search: str | None
    sort: TodoSortField
    order: SortOrder
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def ascending(self) -> bool:
        return self.order is SortOrder.ASC


def _as_int(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return {"true": True, "false": False}.get(value.strip().lower())
    return None


def _shape_sort(sort: Any, order: Any) -> tuple[TodoSortField, SortOrder]:
    try:
        field = TodoSortField(str(sort.value if isinstance(sort, Enum) else sort))
    except ValueError:
        # Unknown sort columns fall back to newest first regardless of order.
        return TodoSortField.CREATED_AT, SortOrder.DESC
    raw_order = order.value if isinstance(order, Enum) else order
    if isinstance(raw_order, str) and raw_order.strip().lower() == SortOrder.ASC.value:
        return field, SortOrder.ASC
    return field, SortOrder.DESC


def shape_todo_query(
    principal: Principal,
    *,
    category: Any = None,
    completed: Any = None,
    search: Any = None,
    sort: Any = None,
    order: Any = None,
    page: Any = None,
    limit: Any = None,
) -> TodoQuery:
    """Build a :class:`TodoQuery` from loosely typed list parameters.

    Out-of-range paging values fall back to defaults instead of failing; the
    only rejected input is a category id that is not a positive integer.
    """

    category_id: int | None = None
    if category is not None and category != "":
        category_id = _as_int(category)
        if category_id is None or category_id < 1:
            raise BadRequestError("category must be a positive integer")

    page_number = _as_int(page)
    if page_number is None or page_number < 1:
        page_number = DEFAULT_PAGE

    page_size = _as_int(limit)
    if page_size is None or not 1 <= page_size <= MAX_LIMIT:
        page_size = DEFAULT_LIMIT

    search_text = search.strip() if isinstance(search, str) else None
    sort_field, sort_order = _shape_sort(sort, order)

    return TodoQuery(
        owner_id=None if principal.is_admin else principal.id,
        category_id=category_id,
        completed=_as_bool(completed),
        search=search_text or None,
        sort=sort_field,
        order=sort_order,
        page=page_number,
        limit=page_size,
    )


def build_pagination(total: int, count: int, query: TodoQuery) -> PaginationMeta:
    """Describe the returned page relative to the full result set."""
    return PaginationMeta(
        total=total,
        count=count,
        limit=query.limit,
        pages=max(1, math.ceil(total / query.limit)),
        current_page=query.page,
    )


__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "MAX_LIMIT",
    "SortOrder",
    "TodoQuery",
    "TodoSortField",
    "build_pagination",
    "shape_todo_query",
]
