"""Reusable FastAPI dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlmodel.ext.asyncio.session import AsyncSession

from .core.config import Settings, get_settings
from .core.context import bind_user
from .db.session import get_db_session
from .errors import ApplicationError, ForbiddenError, UnauthorizedError
from .services import AuthService, Principal

SettingsDependency = Annotated[Settings, Depends(get_settings)]
DatabaseSessionDependency = Annotated[AsyncSession, Depends(get_db_session)]

_bearer_scheme = HTTPBearer(auto_error=False, description="JWT access token issued by /auth/login")
BearerCredentials = Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)]


def _attach_principal(request: Request, principal: Principal) -> Principal:
    request.state.principal = principal
    bind_user(principal.id)
    return principal


async def get_current_principal(
    request: Request,
    credentials: BearerCredentials,
    session: DatabaseSessionDependency,
    settings: SettingsDependency,
) -> Principal:
    """Authenticate the bearer token and attach the principal to the request."""

    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authorization token is required")
    principal = await AuthService(session, settings).resolve_principal(credentials.credentials)
    return _attach_principal(request, principal)


async def resolve_optional_principal(
    request: Request,
    credentials: BearerCredentials,
    session: DatabaseSessionDependency,
    settings: SettingsDependency,
) -> Principal | None:
    """Like :func:`get_current_principal` but returns ``None`` instead of failing."""

    if credentials is None or not credentials.credentials:
        return None
    try:
        principal = await AuthService(session, settings).resolve_principal(credentials.credentials)
    except ApplicationError:
        return None
    return _attach_principal(request, principal)


CurrentPrincipalDependency = Annotated[Principal, Depends(get_current_principal)]
OptionalPrincipalDependency = Annotated[Principal | None, Depends(resolve_optional_principal)]


async def require_admin(principal: CurrentPrincipalDependency) -> Principal:
    """Restrict a route to administrators."""

    if not principal.is_admin:
        raise ForbiddenError("Only administrators can perform this action")
    return principal


AdminPrincipalDependency = Annotated[Principal, Depends(require_admin)]


__all__ = [
    "AdminPrincipalDependency",
    "CurrentPrincipalDependency",
    "DatabaseSessionDependency",
    "OptionalPrincipalDependency",
    "SettingsDependency",
    "get_current_principal",
    "require_admin",
    "resolve_optional_principal",
]
