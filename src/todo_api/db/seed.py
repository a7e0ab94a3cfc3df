"""Seed script for populating development data."""

from __future__ import annotations

import asyncio
import logging

from ..core.config import Settings, get_settings
from ..core.logging import configure_logging
from ..models import UserRole
from ..repositories import CategoryRepository
from ..services import CategoryService, UserService
from .session import Database

logger = logging.getLogger(__name__)

SEED_USERS: tuple[dict[str, str | UserRole], ...] = (
    {
        "username": "admin",
        "email": "admin@example.com",
        "password": "Admin123!",
        "role": UserRole.ADMIN,
    },
    {
        "username": "johndoe",
        "email": "john.doe@example.com",
        "password": "User123!",
        "role": UserRole.USER,
    },
)
SEED_CATEGORIES: tuple[str, ...] = ("Work", "Home", "Hobby")


async def seed(database: Database) -> None:
    """Create the seed users and categories; existing rows are left alone."""
    async with database.session() as session:
        user_service = UserService(session)
        for entry in SEED_USERS:
            email = str(entry["email"])
            if await user_service.get_user_by_email(email) is not None:
                continue
            await user_service.create_user(
                username=str(entry["username"]),
                email=email,
                password=str(entry["password"]),
                role=UserRole(entry["role"]),
            )

        category_service = CategoryService(session)
        existing = {category.name for category in await CategoryRepository(session).all()}
        for name in SEED_CATEGORIES:
            if name not in existing:
                await category_service.create_category(name=name)

    logger.info("Seed data ensured", extra={"users": len(SEED_USERS), "categories": len(SEED_CATEGORIES)})


async def _run(settings: Settings) -> None:
    database = Database.from_settings(settings)
    try:
        if settings.db_create_tables:
            await database.create_all()
        await seed(database)
    finally:
        await database.dispose()


def main() -> None:
    """Entry point for ``todo-api-seed``."""
    settings = get_settings()
    configure_logging(settings)
    asyncio.run(_run(settings))


if __name__ == "__main__":  # pragma: no cover - manual execution entry-point
    main()
