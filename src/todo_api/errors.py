"""Error taxonomy, classification and HTTP formatting.

Every failure that reaches a caller is first turned into an
:class:`ApplicationError` by :func:`classify_error`. The REST exception
handlers and the GraphQL router both format that single shape, so status
codes, visibility of messages and the reporting decision stay identical on
both surfaces.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.requests import Request

from .core.context import REQUEST_ID_HEADER
from .core.reporting import report_error
from .schemas.system import ErrorResponse, FieldErrorSchema

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorKind(str, Enum):
    """Closed set of error categories exposed to callers."""

    VALIDATION = "validation"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single field/message pair attached to validation-shaped errors."""

    field: str
    message: str


class ApplicationError(Exception):
    """Base class for domain-specific errors."""

    kind: ErrorKind = ErrorKind.INTERNAL
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = INTERNAL_ERROR_MESSAGE
    operational: bool = True

    def __init__(
        self,
        message: str | None = None,
        *,
        details: Sequence[FieldError] | None = None,
        is_operational: bool | None = None,
        should_report: bool | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.details: list[FieldError] = list(details or [])
        self.is_operational = self.operational if is_operational is None else is_operational
        self.should_report = (
            self.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR
            if should_report is None
            else should_report
        )
        self.headers: dict[str, str] = dict(headers or {})

    @property
    def public_message(self) -> str:
        """Message safe to show to the caller."""
        return self.message if self.is_operational else INTERNAL_ERROR_MESSAGE

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status_code={self.status_code}, message={self.message!r})"


class ValidationError(ApplicationError):
    """Input failed field-level validation."""

    kind = ErrorKind.VALIDATION
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Validation failed"


class BadRequestError(ApplicationError):
    """Input is well-formed but semantically unusable."""

    kind = ErrorKind.BAD_REQUEST
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid data provided"


class UnauthorizedError(ApplicationError):
    """No usable credentials were presented."""

    kind = ErrorKind.UNAUTHORIZED
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"

    def __init__(self, message: str | None = None, **kwargs: Any) -> None:
        kwargs.setdefault("headers", {"WWW-Authenticate": "Bearer"})
        super().__init__(message, **kwargs)


class ForbiddenError(ApplicationError):
    """The principal is known but lacks rights."""

    kind = ErrorKind.FORBIDDEN
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Access denied"


class NotFoundError(ApplicationError):
    kind = ErrorKind.NOT_FOUND
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ConflictError(ApplicationError):
    kind = ErrorKind.CONFLICT
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class DatabaseError(ApplicationError):
    kind = ErrorKind.DATABASE
    default_message = "Database error"
    operational = False


class InternalError(ApplicationError):
    kind = ErrorKind.INTERNAL
    operational = False


_HTTP_STATUS_ERRORS: dict[int, type[ApplicationError]] = {
    status.HTTP_400_BAD_REQUEST: BadRequestError,
    status.HTTP_401_UNAUTHORIZED: UnauthorizedError,
    status.HTTP_403_FORBIDDEN: ForbiddenError,
    status.HTTP_404_NOT_FOUND: NotFoundError,
    status.HTTP_409_CONFLICT: ConflictError,
    status.HTTP_422_UNPROCESSABLE_ENTITY: ValidationError,
}

_GRAPHQL_CODES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: "BAD_USER_INPUT",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHENTICATED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
}

# Driver messages differ between SQLite and PostgreSQL; both are covered.
_UNIQUE_PATTERNS = (
    re.compile(r"UNIQUE constraint failed: (?P<columns>[\w.,\s]+)"),
    re.compile(r"Key \((?P<columns>[^)]+)\)=\("),
)
_NOT_NULL_PATTERNS = (
    re.compile(r"NOT NULL constraint failed: (?P<columns>[\w.]+)"),
    re.compile(r'null value in column "(?P<columns>\w+)"'),
)
_CHECK_PATTERNS = (
    re.compile(r"CHECK constraint failed: (?P<columns>\w+)"),
    re.compile(r'violates check constraint "(?P<columns>\w+)"'),
)


def _location_to_field(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path", "header")]
    return ".".join(parts) if parts else "body"


def field_errors_from_pydantic(errors: Iterable[Mapping[str, Any]]) -> list[FieldError]:
    """Convert Pydantic/FastAPI error dictionaries into field errors."""

    field_errors: list[FieldError] = []
    for error in errors:
        message = str(error.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        field_errors.append(FieldError(field=_location_to_field(error.get("loc", ())), message=message))
    return field_errors


def _match_columns(text: str, patterns: Sequence[re.Pattern[str]]) -> list[str] | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match is not None:
            columns = [column.strip() for column in match.group("columns").split(",")]
            return [column.rsplit(".", 1)[-1] for column in columns if column]
    return None


def _classify_integrity_error(exc: IntegrityError) -> ApplicationError:
    text = str(exc.orig if exc.orig is not None else exc)

    columns = _match_columns(text, _UNIQUE_PATTERNS)
    if columns is not None or "unique" in text.lower():
        details = [FieldError(field=column, message=f"{column} must be unique") for column in columns or []]
        return ConflictError("Duplicate data", details=details)

    columns = _match_columns(text, _NOT_NULL_PATTERNS)
    if columns is not None:
        return ValidationError(
            details=[FieldError(field=column, message=f"{column} cannot be null") for column in columns]
        )

    columns = _match_columns(text, _CHECK_PATTERNS)
    if columns is not None:
        return ValidationError(
            details=[FieldError(field=column, message="Value violates a storage constraint") for column in columns]
        )

    return DatabaseError(text)


def classify_error(exc: BaseException) -> ApplicationError:
    """Map any failure onto the application error taxonomy."""

    if isinstance(exc, ApplicationError):
        return exc

    classified: ApplicationError
    if isinstance(exc, RequestValidationError):
        classified = ValidationError(details=field_errors_from_pydantic(exc.errors()))
    elif isinstance(exc, PydanticValidationError):
        classified = ValidationError(details=field_errors_from_pydantic(exc.errors()))
    elif isinstance(exc, IntegrityError):
        classified = _classify_integrity_error(exc)
    elif isinstance(exc, SQLAlchemyError):
        classified = DatabaseError(str(exc))
    elif isinstance(exc, StarletteHTTPException):
        error_type = _HTTP_STATUS_ERRORS.get(exc.status_code)
        message = exc.detail if isinstance(exc.detail, str) else None
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = "Route not found"
        if error_type is None:
            error_type = BadRequestError if exc.status_code < 500 else InternalError
        classified = error_type(message)
        classified.status_code = exc.status_code
        if exc.headers:
            classified.headers.update(exc.headers)
    else:
        classified = InternalError(str(exc) or INTERNAL_ERROR_MESSAGE)

    classified.__cause__ = exc
    return classified


def error_response_body(error: ApplicationError) -> dict[str, Any]:
    """Render the uniform ``{status, message, errors?}`` response body.

    Validation errors always carry ``errors``, even when it is empty.
    """

    errors = [FieldErrorSchema(field=item.field, message=item.message) for item in error.details]
    payload = ErrorResponse(
        message=error.public_message,
        errors=errors if errors or error.kind is ErrorKind.VALIDATION else None,
    )
    return payload.model_dump(exclude_none=True)


def graphql_error_code(error: ApplicationError) -> str:
    """Return the symbolic code used by the GraphQL error envelope."""

    code = _GRAPHQL_CODES.get(error.status_code)
    if code is not None:
        return code
    if error.status_code < status.HTTP_500_INTERNAL_SERVER_ERROR:
        return "BAD_USER_INPUT"
    return "INTERNAL_SERVER_ERROR"


def log_error(error: ApplicationError, *, extra: Mapping[str, Any]) -> None:
    """Log a classified error; server failures keep the original stack trace."""

    log_extra = {"status_code": error.status_code, "error_kind": error.kind.value, **extra}
    if error.details:
        log_extra["details"] = [{"field": item.field, "message": item.message} for item in error.details]
    if error.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        original = error.__cause__ or error
        logger.error(
            error.message,
            extra=log_extra,
            exc_info=(type(original), original, original.__traceback__),
        )
    else:
        logger.warning(error.message, extra=log_extra)


def _request_metadata(request: Request) -> dict[str, Any]:
    principal = getattr(request.state, "principal", None)
    return {
        "request_id": getattr(request.state, "request_id", None),
        "path": request.url.path,
        "method": request.method,
        "user_id": getattr(principal, "id", None),
    }


async def _handle_error(request: Request, exc: Exception) -> JSONResponse:
    error = classify_error(exc)
    metadata = _request_metadata(request)
    log_error(error, extra=metadata)
    report_error(
        error.__cause__ or error,
        error,
        tags={"component": "rest", "path": metadata["path"], "method": metadata["method"]},
        extra={"user_id": metadata["user_id"], "details": [item.field for item in error.details]},
    )

    response = JSONResponse(status_code=error.status_code, content=error_response_body(error))
    if error.headers:
        response.headers.update(error.headers)
    if metadata["request_id"]:
        response.headers.setdefault(REQUEST_ID_HEADER, metadata["request_id"])
    return response


def register_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the provided FastAPI app."""

    for exc_type in (
        ApplicationError,
        RequestValidationError,
        PydanticValidationError,
        StarletteHTTPException,
        SQLAlchemyError,
        Exception,
    ):
        app.add_exception_handler(exc_type, _handle_error)


__all__ = [
    "ApplicationError",
    "BadRequestError",
    "ConflictError",
    "DatabaseError",
    "ErrorKind",
    "FieldError",
    "ForbiddenError",
    "INTERNAL_ERROR_MESSAGE",
    "InternalError",
    "NotFoundError",
    "UnauthorizedError",
    "ValidationError",
    "classify_error",
    "error_response_body",
    "field_errors_from_pydantic",
    "graphql_error_code",
    "log_error",
    "register_exception_handlers",
]
