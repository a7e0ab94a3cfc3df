"""Schemas describing authentication payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator

from ..models import UserRole
from .user import UserPublic

Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)]


class RegisterRequest(BaseModel):
    """Incoming payload for registering a new user."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "johndoe",
                "email": "john.doe@example.com",
                "password": "User123!",
            }
        }
    )

    username: Username
    email: EmailStr
    password: str = Field(min_length=6)

    @field_validator("email")
    @classmethod
    def _limit_email_length(cls, value: str) -> str:
        if len(value) > 100:
            raise ValueError("email must be at most 100 characters")
        return value


class LoginRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "john.doe@example.com", "password": "User123!"}}
    )

    email: EmailStr
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    """Access token returned to clients along with the user profile."""

    token: str
    token_type: str = Field(default="bearer", frozen=True)
    expires_in: int = Field(description="Token lifetime in seconds")
    user: UserPublic


class TokenPayload(BaseModel):
    """Validated JWT payload."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    exp: datetime
    iat: datetime
    jti: str
    username: str | None = None
    role: UserRole | None = None


__all__ = ["LoginRequest", "LoginResponse", "RegisterRequest", "TokenPayload"]
