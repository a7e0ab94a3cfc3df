"""Per-request values shared with log records."""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass, replace

REQUEST_ID_HEADER = "X-Request-ID"


@dataclass(frozen=True, slots=True)
class RequestContext:
    request_id: str = "-"
    user_id: int | None = None


_current: ContextVar[RequestContext] = ContextVar("todo_request_context", default=RequestContext())


def current_context() -> RequestContext:
    return _current.get()


def bind_request_context(request_id: str) -> Token[RequestContext]:
    """Start a fresh context for one request; pass the token to ``reset_request_context``."""
    return _current.set(RequestContext(request_id=request_id))


def bind_user(user_id: int | None) -> None:
    """Record the authenticated user on the active context."""
    _current.set(replace(_current.get(), user_id=user_id))


def reset_request_context(token: Token[RequestContext]) -> None:
    _current.reset(token)


__all__ = [
    "REQUEST_ID_HEADER",
    "RequestContext",
    "bind_request_context",
    "bind_user",
    "current_context",
    "reset_request_context",
]
