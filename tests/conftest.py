from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from dataclasses import dataclass

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

from todo_api.core.config import Settings
from todo_api.db.session import Database, get_db_session
from todo_api.main import create_app
from todo_api.models import Category, User, UserRole
from todo_api.services import CategoryService, UserService

DEFAULT_PASSWORD = "Secret123!"


@dataclass(slots=True)
class AuthenticatedUser:
    user: User
    token: str

    @property
    def id(self) -> int:
        assert self.user.id is not None
        return self.user.id

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        database_url="sqlite+aiosqlite:///:memory:",
        jwt_secret_key="test-secret-key",
        access_token_expire_minutes=5,
    )


@pytest_asyncio.fixture
async def database() -> AsyncIterator[Database]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    db = Database(engine)
    await db.create_all()
    try:
        yield db
    finally:
        await db.drop_all()
        await db.dispose()


@pytest_asyncio.fixture
async def session(database: Database) -> AsyncIterator[AsyncSession]:
    async with database.session() as session:
        try:
            yield session
        finally:
            if session.in_transaction():
                await session.rollback()


@pytest_asyncio.fixture
async def app(settings: Settings, database: Database) -> AsyncIterator[FastAPI]:
    application = create_app(settings, database=database)

    async def _override_db_session() -> AsyncIterator[AsyncSession]:
        async with database.session() as session:
            yield session

    application.dependency_overrides[get_db_session] = _override_db_session
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def create_user(database: Database) -> Callable[..., Awaitable[User]]:
    async def _create(
        username: str,
        *,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        role: UserRole = UserRole.USER,
    ) -> User:
        async with database.session() as session:
            return await UserService(session).create_user(
                username=username,
                email=email or f"{username}@example.com",
                password=password,
                role=role,
            )

    return _create


@pytest.fixture
def authenticated_user(
    client: AsyncClient,
    create_user: Callable[..., Awaitable[User]],
) -> Callable[..., Awaitable[AuthenticatedUser]]:
    async def _authenticate(username: str, *, role: UserRole = UserRole.USER) -> AuthenticatedUser:
        user = await create_user(username, role=role)
        response = await client.post(
            "/api/auth/login",
            json={"email": user.email, "password": DEFAULT_PASSWORD},
        )
        assert response.status_code == 200, response.text
        return AuthenticatedUser(user=user, token=response.json()["token"])

    return _authenticate


@pytest.fixture
def create_category(database: Database) -> Callable[[str], Awaitable[Category]]:
    async def _create(name: str) -> Category:
        async with database.session() as session:
            return await CategoryService(session).create_category(name=name)

    return _create
