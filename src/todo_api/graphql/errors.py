"""Map GraphQL errors onto the shared application error taxonomy."""

from __future__ import annotations

from graphql import GraphQLError

from ..errors import ApplicationError, BadRequestError, classify_error


def classify_graphql_error(error: GraphQLError) -> ApplicationError:
    """Classify ``error`` the way the REST handlers classify exceptions.

    Errors raised before any resolver ran carry no ``path``: syntax and
    validation failures have no original exception, while variable coercion
    keeps the scalar's parse error as ``original_error``. Both are bad input.
    """

    original = error.original_error
    if isinstance(original, ApplicationError):
        return original
    if original is None or error.path is None:
        classified = BadRequestError(error.message)
        if original is not None:
            classified.__cause__ = original
        return classified
    return classify_error(original)


__all__ = ["classify_graphql_error"]
