"""Database engine and session management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import sqlalchemy as sa
from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import Settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Own the async engine and session factory for the application lifetime."""

    def __init__(self, engine: AsyncEngine) -> None:
        self._engine = engine
        self._session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        if engine.dialect.name == "sqlite":
            event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    @classmethod
    def from_settings(cls, settings: Settings, **engine_kwargs: Any) -> "Database":
        """Build a database handle from application settings."""

        options: dict[str, Any] = {"echo": settings.db_echo}
        if not settings.database_url.startswith("sqlite"):
            options["pool_pre_ping"] = True
        options.update(engine_kwargs)
        return cls(create_async_engine(settings.database_url, **options))

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a new ``AsyncSession`` bound to the engine."""
        async with self._session_factory() as session:
            yield session

    async def ping(self) -> None:
        """Run ``SELECT 1``; storage errors propagate to the caller."""
        async with self._engine.connect() as connection:
            await connection.execute(sa.text("SELECT 1"))

    async def create_all(self) -> None:
        """Create all tables known to the SQLModel metadata."""
        from .. import models  # noqa: F401  # register tables on the metadata

        async with self._engine.begin() as connection:
            await connection.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables ensured")

    async def drop_all(self) -> None:
        async with self._engine.begin() as connection:
            await connection.run_sync(SQLModel.metadata.drop_all)

    async def dispose(self) -> None:
        await self._engine.dispose()


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Yield a request-scoped session from the application's ``Database``."""

    database: Database = request.app.state.database
    async with database.session() as session:
        yield session


__all__ = ["Database", "get_db_session"]
