"""Authentication service encapsulating registration, login and token checks."""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import Settings
from ..core.security import AccessToken, JWTError, issue_access_token, read_access_token, verify_password
from ..errors import ConflictError, UnauthorizedError
from ..models import User, UserRole
from ..schemas.auth import TokenPayload
from .policy import Principal
from .users import UserService

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid token"


class AuthService:
    """High-level authentication workflows."""

    def __init__(self, session: AsyncSession, settings: Settings) -> None:
        self._session = session
        self._settings = settings
        self._user_service = UserService(session)

    async def register_user(self, *, username: str, email: str, password: str) -> User:
        """Create a regular user, refusing duplicate usernames or emails."""
        existing = await self._user_service.find_by_username_or_email(username=username, email=email)
        if existing is not None:
            raise ConflictError("User with the same email or username already exists")
        user = await self._user_service.create_user(
            username=username,
            email=email,
            password=password,
            role=UserRole.USER,
        )
        logger.info("User registered", extra={"user_id": user.id})
        return user

    async def authenticate_user(self, email: str, password: str) -> User:
        """Return the user owning ``email``/``password`` or raise 401."""
        user = await self._user_service.get_user_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise UnauthorizedError("Invalid credentials")
        return user

    def issue_token(self, user: User) -> AccessToken:
        if user.id is None:  # pragma: no cover - persisted users always have an id
            raise ValueError("User must be persisted before issuing tokens")
        return issue_access_token(
            user.id,
            self._settings,
            claims={"username": user.username, "role": UserRole(user.role).value},
        )

    async def login(self, email: str, password: str) -> tuple[User, AccessToken]:
        user = await self.authenticate_user(email, password)
        token = self.issue_token(user)
        logger.info("User logged in", extra={"user_id": user.id})
        return user, token

    async def resolve_principal(self, token: str) -> Principal:
        """Verify ``token`` and load the user it names.

        Every failure (signature, expiry, claims, unknown user) surfaces as
        the same ``UnauthorizedError``.
        """
        try:
            payload = TokenPayload.model_validate(read_access_token(token, self._settings))
            user_id = int(payload.sub)
        except (JWTError, PydanticValidationError, ValueError) as exc:
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE) from exc

        user = await self._user_service.get_user(user_id)
        if user is None:
            raise UnauthorizedError(INVALID_TOKEN_MESSAGE)
        return Principal.from_user(user)


__all__ = ["AuthService", "INVALID_TOKEN_MESSAGE"]
