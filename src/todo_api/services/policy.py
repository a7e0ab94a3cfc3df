"""Ownership-based access policy for todos."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import ForbiddenError
from ..models import User, UserRole

TODO_ACCESS_DENIED_MESSAGE = "You are not allowed to access this todo"


@dataclass(frozen=True, slots=True)
class Principal:
    """The authenticated caller attached to a request."""

    id: int
    role: UserRole
    username: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        if user.id is None:  # pragma: no cover - persisted users always have an id
            raise ValueError("User must be persisted before it can act as a principal")
        return cls(id=user.id, role=UserRole(user.role), username=user.username)


def can_access(owner_id: int, principal: Principal) -> bool:
    """Admins access everything; everyone else only what they own."""
    return principal.is_admin or owner_id == principal.id


def ensure_can_access(owner_id: int, principal: Principal) -> None:
    """Raise ``ForbiddenError`` unless ``principal`` may act on the resource.

    Callers confirm the resource exists first; this never performs a lookup.
    """
    if not can_access(owner_id, principal):
        raise ForbiddenError(TODO_ACCESS_DENIED_MESSAGE)


__all__ = ["Principal", "TODO_ACCESS_DENIED_MESSAGE", "can_access", "ensure_can_access"]
