from __future__ import annotations

import pytest

from todo_api.errors import ForbiddenError
from todo_api.models import User, UserRole
from todo_api.services.policy import Principal, can_access, ensure_can_access


def test_owner_can_access_own_resource() -> None:
    principal = Principal(id=3, role=UserRole.USER, username="owner")
    assert can_access(3, principal) is True
    ensure_can_access(3, principal)


def test_non_owner_is_forbidden() -> None:
    principal = Principal(id=4, role=UserRole.USER, username="other")
    assert can_access(3, principal) is False
    with pytest.raises(ForbiddenError) as excinfo:
        ensure_can_access(3, principal)
    assert excinfo.value.status_code == 403
    assert excinfo.value.message == "You are not allowed to access this todo"


def test_admin_can_access_anything() -> None:
    admin = Principal(id=1, role=UserRole.ADMIN, username="admin")
    assert admin.is_admin is True
    assert can_access(99, admin) is True


def test_principal_from_user_is_immutable() -> None:
    user = User(id=5, username="zoe", email="zoe@example.com", hashed_password="x", role=UserRole.USER)
    principal = Principal.from_user(user)
    assert principal == Principal(id=5, role=UserRole.USER, username="zoe")
    with pytest.raises(AttributeError):
        principal.role = UserRole.ADMIN  # type: ignore[misc]
