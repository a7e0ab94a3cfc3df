"""Account management."""

from __future__ import annotations

import logging

from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.security import hash_password
from ..errors import NotFoundError
from ..models import User, UserRole
from ..repositories import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Creates and looks up accounts; plain passwords never reach the session."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._users = UserRepository(session)

    async def create_user(
        self,
        *,
        username: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> User:
        user = await self._users.save(
            User(username=username, email=email, role=role, hashed_password=hash_password(password))
        )
        await self._session.commit()
        await self._users.reload(user)
        logger.info("Account created", extra={"user_id": user.id, "role": user.role.value})
        return user

    async def get_user(self, user_id: int) -> User | None:
        return await self._users.get(user_id)

    async def require_user(self, user_id: int) -> User:
        user = await self._users.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._users.get_by_email(email)

    async def find_by_username_or_email(self, *, username: str, email: str) -> User | None:
        return await self._users.get_by_username_or_email(username=username, email=email)

    async def change_password(self, user_id: int, password: str) -> User:
        """Store a fresh hash for ``password``; earlier tokens stay valid until they expire."""
        user = await self.require_user(user_id)
        user.hashed_password = hash_password(password)
        await self._session.commit()
        await self._users.reload(user)
        logger.info("Password changed", extra={"user_id": user.id})
        return user


__all__ = ["UserService"]
