"""GraphQL surface built on strawberry."""

from __future__ import annotations

from .router import build_graphql_router
from .schema import schema

__all__ = ["build_graphql_router", "schema"]
