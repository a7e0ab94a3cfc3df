"""Accounts that own todos."""

from __future__ import annotations

from enum import Enum

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from .common import TimestampMixin


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class UserBase(SQLModel, table=False):
    username: str = Field(max_length=50, sa_type=sa.String(length=50), nullable=False)
    email: str = Field(max_length=100, sa_type=sa.String(length=100), nullable=False)
    role: UserRole = Field(
        default=UserRole.USER,
        sa_type=sa.Enum(
            UserRole,
            name="user_role",
            native_enum=False,
            values_callable=lambda roles: [role.value for role in roles],
        ),
        nullable=False,
        sa_column_kwargs={"server_default": UserRole.USER.value},
    )


class User(UserBase, TimestampMixin, table=True):
    """A registered account; only the bcrypt hash of the password is stored."""

    __tablename__ = "users"
    __table_args__ = (
        sa.UniqueConstraint("username", name="uq_users_username"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    id: int | None = Field(default=None, primary_key=True)
    hashed_password: str = Field(max_length=255, sa_type=sa.String(length=255), nullable=False)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


__all__ = ["User", "UserBase", "UserRole"]
