"""FastAPI router serving the GraphQL endpoint with the shared error envelope."""

from __future__ import annotations

from typing import Any

from fastapi import Request, Response
from graphql import GraphQLError
from strawberry.fastapi import GraphQLRouter
from strawberry.http import GraphQLHTTPResponse
from strawberry.types import ExecutionResult

from ..core.config import Settings
from ..errors import ErrorKind, graphql_error_code
from .context import get_graphql_context
from .errors import classify_graphql_error
from .schema import schema


def format_graphql_error(error: GraphQLError) -> dict[str, Any]:
    """Render one GraphQL error as ``{message, code, status, path, locations, errors?}``.

    Errors raised before any resolver ran (syntax, unknown fields, bad
    variables) are reported as bad input.
    """

    classified = classify_graphql_error(error)

    body: dict[str, Any] = {
        "message": classified.public_message,
        "code": graphql_error_code(classified),
        "status": classified.status_code,
        "path": error.path,
        "locations": [
            {"line": location.line, "column": location.column} for location in error.locations or []
        ],
    }
    if classified.details or classified.kind is ErrorKind.VALIDATION:
        body["errors"] = [{"field": item.field, "message": item.message} for item in classified.details]
    return body


class TodoGraphQLRouter(GraphQLRouter):
    """GraphQL router whose HTTP status follows the first error in the result."""

    async def process_result(self, request: Request, result: ExecutionResult) -> GraphQLHTTPResponse:
        payload: GraphQLHTTPResponse = {"data": result.data}
        if result.errors:
            payload["errors"] = [format_graphql_error(error) for error in result.errors]
        if result.extensions:
            payload["extensions"] = result.extensions
        return payload

    def create_response(self, response_data: Any, sub_response: Response) -> Response:
        if isinstance(response_data, dict):
            errors = response_data.get("errors")
            if errors:
                sub_response.status_code = errors[0]["status"]
        return super().create_response(response_data=response_data, sub_response=sub_response)


def build_graphql_router(settings: Settings) -> TodoGraphQLRouter:
    """Create the GraphQL router; GraphiQL is served only when enabled."""

    return TodoGraphQLRouter(
        schema,
        context_getter=get_graphql_context,
        graphql_ide="graphiql" if settings.graphiql_enabled else None,
    )


__all__ = ["TodoGraphQLRouter", "build_graphql_router", "format_graphql_error"]
