"""Entry point for the todo FastAPI application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from .api.routers import api_router, health_router
from .core.config import Settings, get_settings
from .core.logging import configure_logging
from .core.middleware import RequestContextMiddleware
from .core.reporting import configure_error_reporting
from .db.session import Database
from .deps import SettingsDependency
from .errors import DatabaseError, register_exception_handlers
from .graphql import build_graphql_router
from .schemas.system import RootResponse

logger = logging.getLogger(__name__)


def _normalise_prefix(raw_prefix: str) -> str:
    router_prefix = raw_prefix.strip()
    if router_prefix and not router_prefix.startswith("/"):
        router_prefix = f"/{router_prefix}"
    router_prefix = router_prefix.rstrip("/")
    if router_prefix == "/":
        router_prefix = ""
    return router_prefix


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Open the database for the lifetime of the application."""

    settings: Settings = application.state.settings
    database: Database | None = getattr(application.state, "database", None)
    owns_database = database is None
    if database is None:
        database = Database.from_settings(settings)
        application.state.database = database

    try:
        await database.ping()
    except (SQLAlchemyError, OSError) as exc:
        logger.critical("Database is unreachable at startup", exc_info=True)
        raise DatabaseError("Unable to connect to the database") from exc

    if settings.db_create_tables:
        await database.create_all()

    logger.info(
        "Application started",
        extra={"environment": settings.environment, "version": settings.version},
    )
    try:
        yield
    finally:
        if owns_database:
            await database.dispose()
        logger.info("Application stopped")


def create_app(settings: Settings | None = None, *, database: Database | None = None) -> FastAPI:
    """Instantiate and configure the FastAPI application."""

    explicit_settings = settings is not None
    settings = settings or get_settings()
    configure_logging(settings)
    configure_error_reporting(settings)

    router_prefix = _normalise_prefix(settings.api_prefix)
    openapi_url = "/openapi.json" if not router_prefix else f"{router_prefix}/openapi.json"

    application = FastAPI(
        title=settings.project_name,
        version=settings.version,
        summary="Todo service with JWT auth, categories, paginated todo lists and GraphQL.",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url=openapi_url,
        lifespan=lifespan,
    )

    application.state.settings = settings
    if database is not None:
        application.state.database = database
    if explicit_settings:
        application.dependency_overrides[get_settings] = lambda: settings

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    application.add_middleware(RequestContextMiddleware)

    if router_prefix:
        application.include_router(api_router, prefix=router_prefix)
    else:
        application.include_router(api_router)

    application.include_router(health_router)
    application.include_router(build_graphql_router(settings), prefix=settings.graphql_path)

    register_exception_handlers(application)

    @application.get("/", response_model=RootResponse, summary="Service metadata", tags=["system"])
    async def read_root(current_settings: SettingsDependency) -> RootResponse:
        """Expose minimal service metadata at the root endpoint."""
        return RootResponse(
            name=current_settings.project_name,
            environment=current_settings.environment,
            version=current_settings.version,
            api_prefix=router_prefix,
            graphql_path=current_settings.graphql_path,
            docs_url="/docs",
        )

    return application


app = create_app()


def run() -> None:
    """Convenience entry point for ``todo-api``."""

    settings: Settings = get_settings()
    uvicorn.run(
        "todo_api.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.reload,
        log_config=None,
    )


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    run()
