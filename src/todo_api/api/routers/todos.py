"""Routes handling todo CRUD operations."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from ...deps import CurrentPrincipalDependency, DatabaseSessionDependency
from ...schemas import TodoCreate, TodoListResponse, TodoRead, TodoUpdate
from ...services import SortOrder, TodoService, TodoSortField, shape_todo_query
from ...services.queries import DEFAULT_LIMIT, DEFAULT_PAGE, MAX_LIMIT

router = APIRouter(prefix="/todos", tags=["todos"])

CategoryQuery = Annotated[
    int | None,
    Query(ge=1, description="Only return todos in this category."),
]
CompletedQuery = Annotated[
    bool | None,
    Query(description="Filter on completion state."),
]
SearchQuery = Annotated[
    str | None,
    Query(max_length=120, description="Case-insensitive substring match on the title."),
]
SortQuery = Annotated[TodoSortField, Query(description="Column used for ordering.")]
OrderQuery = Annotated[SortOrder, Query(description="Sort direction.")]
PageQuery = Annotated[int, Query(ge=1, description="1-based page number.")]
LimitQuery = Annotated[
    int,
    Query(ge=1, le=MAX_LIMIT, description="Maximum number of todos in a single page."),
]


@router.get(
    "",
    response_model=TodoListResponse,
    summary="List todos with pagination, filtering and sorting",
)
async def list_todos(
    session: DatabaseSessionDependency,
    principal: CurrentPrincipalDependency,
    category: CategoryQuery = None,
    completed: CompletedQuery = None,
    search: SearchQuery = None,
    sort: SortQuery = TodoSortField.CREATED_AT,
    order: OrderQuery = SortOrder.DESC,
    page: PageQuery = DEFAULT_PAGE,
    limit: LimitQuery = DEFAULT_LIMIT,
) -> TodoListResponse:
    query = shape_todo_query(
        principal,
        category=category,
        completed=completed,
        search=search,
        sort=sort,
        order=order,
        page=page,
        limit=limit,
    )
    todos, meta = await TodoService(session).list_todos(query)
    return TodoListResponse(data=[TodoRead.model_validate(todo) for todo in todos], meta=meta)


@router.post(
    "",
    response_model=TodoRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new todo",
)
async def create_todo(
    payload: TodoCreate,
    session: DatabaseSessionDependency,
    principal: CurrentPrincipalDependency,
) -> TodoRead:
    todo = await TodoService(session).create_todo(principal, payload)
    return TodoRead.model_validate(todo)


@router.get("/{todo_id}", response_model=TodoRead, summary="Retrieve a todo by id")
async def get_todo(
    todo_id: uuid.UUID,
    session: DatabaseSessionDependency,
    principal: CurrentPrincipalDependency,
) -> TodoRead:
    todo = await TodoService(session).get_todo(todo_id, principal)
    return TodoRead.model_validate(todo)


@router.put("/{todo_id}", response_model=TodoRead, summary="Update an existing todo")
async def update_todo(
    todo_id: uuid.UUID,
    payload: TodoUpdate,
    session: DatabaseSessionDependency,
    principal: CurrentPrincipalDependency,
) -> TodoRead:
    todo = await TodoService(session).update_todo(todo_id, principal, payload)
    return TodoRead.model_validate(todo)


@router.patch("/{todo_id}/toggle", response_model=TodoRead, summary="Flip a todo's completion state")
async def toggle_todo(
    todo_id: uuid.UUID,
    session: DatabaseSessionDependency,
    principal: CurrentPrincipalDependency,
) -> TodoRead:
    todo = await TodoService(session).toggle_todo(todo_id, principal)
    return TodoRead.model_validate(todo)


@router.delete("/{todo_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete a todo")
async def delete_todo(
    todo_id: uuid.UUID,
    session: DatabaseSessionDependency,
    principal: CurrentPrincipalDependency,
) -> Response:
    await TodoService(session).delete_todo(todo_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
