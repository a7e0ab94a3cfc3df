from __future__ import annotations

import pytest
from httpx import AsyncClient

from todo_api.models import UserRole

pytestmark = pytest.mark.asyncio


async def test_admin_category_round_trip(client: AsyncClient, authenticated_user) -> None:
    admin = await authenticated_user("root", role=UserRole.ADMIN)

    created = await client.post("/api/categories", json={"name": "  Work  "}, headers=admin.headers)
    assert created.status_code == 201
    category = created.json()
    assert category["name"] == "Work"

    fetched = await client.get(f"/api/categories/{category['id']}", headers=admin.headers)
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Work"

    renamed = await client.put(
        f"/api/categories/{category['id']}",
        json={"name": "Office"},
        headers=admin.headers,
    )
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Office"

    deleted = await client.delete(f"/api/categories/{category['id']}", headers=admin.headers)
    assert deleted.status_code == 204

    missing = await client.get(f"/api/categories/{category['id']}", headers=admin.headers)
    assert missing.status_code == 404
    assert missing.json() == {"status": "error", "message": "Category not found"}


async def test_categories_are_listed_newest_first(
    client: AsyncClient,
    authenticated_user,
    create_category,
) -> None:
    user = await authenticated_user("reader")
    for name in ("Work", "Home", "Hobby"):
        await create_category(name)

    response = await client.get("/api/categories", headers=user.headers)
    assert response.status_code == 200
    assert [item["name"] for item in response.json()] == ["Hobby", "Home", "Work"]


async def test_category_writes_require_admin(client: AsyncClient, authenticated_user, create_category) -> None:
    user = await authenticated_user("regular")
    category = await create_category("Work")

    create_response = await client.post("/api/categories", json={"name": "Garden"}, headers=user.headers)
    assert create_response.status_code == 403
    assert create_response.json()["message"] == "Only administrators can perform this action"

    update_response = await client.put(
        f"/api/categories/{category.id}",
        json={"name": "Garden"},
        headers=user.headers,
    )
    assert update_response.status_code == 403

    delete_response = await client.delete(f"/api/categories/{category.id}", headers=user.headers)
    assert delete_response.status_code == 403


async def test_category_listing_requires_authentication(client: AsyncClient) -> None:
    response = await client.get("/api/categories")
    assert response.status_code == 401


async def test_category_name_is_validated(client: AsyncClient, authenticated_user) -> None:
    admin = await authenticated_user("root", role=UserRole.ADMIN)

    response = await client.post("/api/categories", json={"name": " x "}, headers=admin.headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "name"


async def test_deleting_category_detaches_todos(client: AsyncClient, authenticated_user) -> None:
    admin = await authenticated_user("root", role=UserRole.ADMIN)
    category = (await client.post("/api/categories", json={"name": "Work"}, headers=admin.headers)).json()

    todo_response = await client.post(
        "/api/todos",
        json={"title": "File the report", "category_id": category["id"]},
        headers=admin.headers,
    )
    assert todo_response.status_code == 201
    todo = todo_response.json()
    assert todo["category"] == {"id": category["id"], "name": "Work"}

    deleted = await client.delete(f"/api/categories/{category['id']}", headers=admin.headers)
    assert deleted.status_code == 204

    refreshed = await client.get(f"/api/todos/{todo['id']}", headers=admin.headers)
    assert refreshed.status_code == 200
    assert refreshed.json()["category_id"] is None
    assert refreshed.json()["category"] is None
