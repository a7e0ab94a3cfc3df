"""Password hashing and bearer token helpers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import Settings

_password_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(frozen=True, slots=True)
class AccessToken:
    """A signed access token and the window in which it is accepted."""

    value: str
    token_id: str
    issued_at: datetime
    expires_at: datetime

    @property
    def expires_in(self) -> int:
        """Lifetime in seconds, as advertised to the client at login."""
        return max(int((self.expires_at - self.issued_at).total_seconds()), 0)


def hash_password(password: str) -> str:
    return _password_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored bcrypt hash."""
    return _password_context.verify(password, password_hash)


def issue_access_token(
    user_id: int,
    settings: Settings,
    *,
    claims: dict[str, Any] | None = None,
    lifetime: timedelta | None = None,
) -> AccessToken:
    """Sign a token whose subject is ``user_id``.

    ``lifetime`` defaults to ``settings.access_token_expire_minutes``; a
    negative value yields an already expired token.
    """

    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (lifetime or timedelta(minutes=settings.access_token_expire_minutes))
    token_id = uuid4().hex
    payload = {
        **(claims or {}),
        "sub": str(user_id),
        "iat": issued_at,
        "exp": expires_at,
        "jti": token_id,
    }
    value = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return AccessToken(value=value, token_id=token_id, issued_at=issued_at, expires_at=expires_at)


def read_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Return the verified claims of ``token``; raises ``JWTError`` otherwise."""

    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


__all__ = [
    "AccessToken",
    "JWTError",
    "hash_password",
    "issue_access_token",
    "read_access_token",
    "verify_password",
]
