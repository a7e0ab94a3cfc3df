"""Per-request GraphQL context."""

from __future__ import annotations

from sqlmodel.ext.asyncio.session import AsyncSession
from strawberry.fastapi import BaseContext

from ..core.config import Settings
from ..deps import DatabaseSessionDependency, OptionalPrincipalDependency, SettingsDependency
from ..errors import UnauthorizedError
from ..services import Principal


class GraphQLContext(BaseContext):
    """Session and (optional) principal shared by every resolver of a request."""

    def __init__(self, session: AsyncSession, settings: Settings, principal: Principal | None) -> None:
        super().__init__()
        self.session = session
        self.settings = settings
        self.principal = principal

    def require_principal(self) -> Principal:
        if self.principal is None:
            raise UnauthorizedError("Authentication required")
        return self.principal


async def get_graphql_context(
    session: DatabaseSessionDependency,
    settings: SettingsDependency,
    principal: OptionalPrincipalDependency,
) -> GraphQLContext:
    return GraphQLContext(session=session, settings=settings, principal=principal)


__all__ = ["GraphQLContext", "get_graphql_context"]
