"""Lookups over user accounts."""

from __future__ import annotations

from sqlalchemy import or_

from ..models import User
from .base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        return await self.first(User.email == email)

    async def get_by_username_or_email(self, *, username: str, email: str) -> User | None:
        """Return an account clashing with either identifier."""
        return await self.first(or_(User.username == username, User.email == email))
