"""Build todo write models from plain mappings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, overload

from pydantic import ValidationError as PydanticValidationError

from ..errors import ValidationError, field_errors_from_pydantic
from ..schemas.todo import TodoCreate, TodoUpdate


@overload
def parse_todo_input(raw: Mapping[str, Any] | None, *, partial: Literal[False]) -> TodoCreate: ...


@overload
def parse_todo_input(raw: Mapping[str, Any] | None, *, partial: Literal[True]) -> TodoUpdate: ...


def parse_todo_input(raw: Mapping[str, Any] | None, *, partial: bool) -> TodoCreate | TodoUpdate:
    """Validate ``raw`` as a full (create) or partial (update) todo payload.

    Pydantic failures become a :class:`ValidationError` carrying one field
    error per problem.
    """

    model = TodoUpdate if partial else TodoCreate
    try:
        return model.model_validate(dict(raw or {}))
    except PydanticValidationError as exc:
        details = field_errors_from_pydantic(exc.errors())
        message = details[0].message if len(details) == 1 and details[0].field == "body" else None
        raise ValidationError(message, details=details) from exc


__all__ = ["parse_todo_input"]
