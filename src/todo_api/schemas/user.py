"""User-facing Pydantic schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr

from ..models import UserRole


class UserPublic(BaseModel):
    """Public representation of a user; never carries the password hash."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    username: str
    email: EmailStr
    role: UserRole
    created_at: datetime


class UserSummary(BaseModel):
    """Owner details embedded in todo payloads."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    username: str
    email: str


__all__ = ["UserPublic", "UserSummary"]
