"""GraphQL queries and mutations over the shared todo services."""

import uuid
from typing import Any, Optional

import strawberry
from graphql import GraphQLError
from strawberry.schema.config import StrawberryConfig
from strawberry.types import ExecutionContext, Info

from ..core.reporting import report_error
from ..errors import BadRequestError, NotFoundError, log_error
from ..services import CategoryService, TodoService, UserService, parse_todo_input, shape_todo_query
from .context import GraphQLContext
from .errors import classify_graphql_error
from .types import (
    AddTodoInput,
    CategoryType,
    PaginationMetaType,
    TodoPage,
    TodoType,
    UpdateTodoInput,
    UserType,
    provided_fields,
)

GraphQLInfo = Info[GraphQLContext, None]


def _parse_todo_id(value: strawberry.ID) -> uuid.UUID:
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise BadRequestError("id must be a valid UUID") from exc


@strawberry.type
class Query:
    @strawberry.field(description="The authenticated user.")
    async def me(self, info: GraphQLInfo) -> UserType:
        principal = info.context.require_principal()
        user = await UserService(info.context.session).get_user(principal.id)
        if user is None:  # pragma: no cover - removed after the token was checked
            raise NotFoundError("User not found")
        return UserType.from_model(user)

    @strawberry.field(description="All categories, newest first.")
    async def categories(self, info: GraphQLInfo) -> list[CategoryType]:
        info.context.require_principal()
        categories = await CategoryService(info.context.session).list_categories()
        return [CategoryType.from_model(category) for category in categories]

    @strawberry.field(description="One page of todos; out-of-range paging values fall back to defaults.")
    async def todos(
        self,
        info: GraphQLInfo,
        category: Optional[int] = None,
        completed: Optional[bool] = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
        order: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> TodoPage:
        principal = info.context.require_principal()
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
        todos, meta = await TodoService(info.context.session).list_todos(query)
        return TodoPage(
            data=[TodoType.from_model(todo) for todo in todos],
            meta=PaginationMetaType.from_schema(meta),
        )

    @strawberry.field
    async def todo(self, info: GraphQLInfo, id: strawberry.ID) -> TodoType:
        principal = info.context.require_principal()
        todo = await TodoService(info.context.session).get_todo(_parse_todo_id(id), principal)
        return TodoType.from_model(todo)


@strawberry.type
class Mutation:
    @strawberry.mutation(name="addTodo")
    async def add_todo(self, info: GraphQLInfo, input: AddTodoInput) -> TodoType:
        principal = info.context.require_principal()
        payload = parse_todo_input(provided_fields(input), partial=False)
        todo = await TodoService(info.context.session).create_todo(principal, payload)
        return TodoType.from_model(todo)

    @strawberry.mutation(name="updateTodo")
    async def update_todo(self, info: GraphQLInfo, id: strawberry.ID, input: UpdateTodoInput) -> TodoType:
        principal = info.context.require_principal()
        payload = parse_todo_input(provided_fields(input), partial=True)
        todo = await TodoService(info.context.session).update_todo(_parse_todo_id(id), principal, payload)
        return TodoType.from_model(todo)

    @strawberry.mutation(name="toggleTodo")
    async def toggle_todo(self, info: GraphQLInfo, id: strawberry.ID) -> TodoType:
        principal = info.context.require_principal()
        todo = await TodoService(info.context.session).toggle_todo(_parse_todo_id(id), principal)
        return TodoType.from_model(todo)


class TodoSchema(strawberry.Schema):
    """Schema that logs and reports resolver failures through the shared error pipeline."""

    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: Optional[ExecutionContext] = None,
    ) -> None:
        context: Any = execution_context.context if execution_context is not None else None
        request = getattr(context, "request", None)
        principal = getattr(context, "principal", None)
        metadata = {
            "path": request.url.path if request is not None else None,
            "method": request.method if request is not None else None,
            "user_id": getattr(principal, "id", None),
            "operation": execution_context.operation_name if execution_context is not None else None,
        }
        for error in errors:
            classified = classify_graphql_error(error)
            log_error(classified, extra={**metadata, "graphql_path": error.path})
            report_error(
                error.original_error or classified,
                classified,
                tags={"component": "graphql", "path": metadata["path"], "method": metadata["method"]},
                extra={"user_id": metadata["user_id"], "graphql_path": error.path},
            )


schema = TodoSchema(
    query=Query,
    mutation=Mutation,
    config=StrawberryConfig(auto_camel_case=False),
)


__all__ = ["Mutation", "Query", "TodoSchema", "schema"]
