from __future__ import annotations

import math
import uuid

import pytest
from httpx import AsyncClient

from todo_api.models import UserRole

pytestmark = pytest.mark.asyncio


async def _create_todo(client: AsyncClient, headers: dict[str, str], **payload) -> dict:
    response = await client.post("/api/todos", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_todo_crud_flow(client: AsyncClient, authenticated_user, create_category) -> None:
    owner = await authenticated_user("owner")
    category = await create_category("Work")

    created = await _create_todo(
        client,
        owner.headers,
        title="  Write release notes  ",
        category_id=category.id,
        due_date="2030-01-15T09:30:00Z",
        completed=True,
    )
    assert created["title"] == "Write release notes"
    assert created["completed"] is False
    assert created["user_id"] == owner.id
    assert created["category"] == {"id": category.id, "name": "Work"}
    assert created["user"]["username"] == "owner"
    assert created["due_date"].startswith("2030-01-15T09:30:00")
    uuid.UUID(created["id"])

    fetched = await client.get(f"/api/todos/{created['id']}", headers=owner.headers)
    assert fetched.status_code == 200
    assert fetched.json()["id"] == created["id"]

    updated = await client.put(
        f"/api/todos/{created['id']}",
        json={"title": "Publish release notes", "due_date": None},
        headers=owner.headers,
    )
    assert updated.status_code == 200
    updated_json = updated.json()
    assert updated_json["title"] == "Publish release notes"
    assert updated_json["due_date"] is None
    assert updated_json["category_id"] == category.id
    assert updated_json["user_id"] == owner.id

    cleared = await client.put(
        f"/api/todos/{created['id']}",
        json={"category_id": None},
        headers=owner.headers,
    )
    assert cleared.status_code == 200
    assert cleared.json()["category"] is None

    deleted = await client.delete(f"/api/todos/{created['id']}", headers=owner.headers)
    assert deleted.status_code == 204

    missing = await client.get(f"/api/todos/{created['id']}", headers=owner.headers)
    assert missing.status_code == 404
    assert missing.json() == {"status": "error", "message": "Todo not found"}


async def test_category_round_trip_and_repeatable_reads(
    client: AsyncClient,
    authenticated_user,
    create_category,
) -> None:
    owner = await authenticated_user("reader")
    category = await create_category("Hobby")

    filed = await _create_todo(client, owner.headers, title="Tune the guitar", category_id=category.id)
    first = await client.get(f"/api/todos/{filed['id']}", headers=owner.headers)
    second = await client.get(f"/api/todos/{filed['id']}", headers=owner.headers)
    assert first.status_code == second.status_code == 200
    assert first.json()["category"] == {"id": category.id, "name": "Hobby"}
    assert first.json()["category_id"] == category.id
    assert first.json() == second.json()

    loose = await _create_todo(client, owner.headers, title="Buy strings")
    assert loose["category"] is None
    assert loose["category_id"] is None
    fetched = await client.get(f"/api/todos/{loose['id']}", headers=owner.headers)
    assert fetched.status_code == 200
    assert fetched.json()["category"] is None


async def test_double_toggle_restores_state(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("toggler")
    todo = await _create_todo(client, owner.headers, title="Water the plants")

    first = await client.patch(f"/api/todos/{todo['id']}/toggle", headers=owner.headers)
    assert first.status_code == 200
    assert first.json()["completed"] is True

    second = await client.patch(f"/api/todos/{todo['id']}/toggle", headers=owner.headers)
    assert second.status_code == 200
    assert second.json()["completed"] is False


async def test_non_owner_cannot_touch_todo(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("owner")
    intruder = await authenticated_user("intruder")
    todo = await _create_todo(client, owner.headers, title="Private errand")

    expected = {"status": "error", "message": "You are not allowed to access this todo"}
    responses = [
        await client.get(f"/api/todos/{todo['id']}", headers=intruder.headers),
        await client.put(f"/api/todos/{todo['id']}", json={"title": "Hijacked"}, headers=intruder.headers),
        await client.patch(f"/api/todos/{todo['id']}/toggle", headers=intruder.headers),
        await client.delete(f"/api/todos/{todo['id']}", headers=intruder.headers),
    ]
    for response in responses:
        assert response.status_code == 403
        assert response.json() == expected

    still_there = await client.get(f"/api/todos/{todo['id']}", headers=owner.headers)
    assert still_there.json()["title"] == "Private errand"
    assert still_there.json()["completed"] is False


async def test_missing_todo_is_reported_before_ownership(client: AsyncClient, authenticated_user) -> None:
    user = await authenticated_user("someone")
    response = await client.get(f"/api/todos/{uuid.uuid4()}", headers=user.headers)
    assert response.status_code == 404


async def test_admin_bypasses_ownership(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("owner")
    admin = await authenticated_user("root", role=UserRole.ADMIN)
    todo = await _create_todo(client, owner.headers, title="Owner's chore")

    toggled = await client.patch(f"/api/todos/{todo['id']}/toggle", headers=admin.headers)
    assert toggled.status_code == 200
    assert toggled.json()["completed"] is True
    assert toggled.json()["user_id"] == owner.id


async def test_admin_sees_all_todos_and_users_see_their_own(client: AsyncClient, authenticated_user) -> None:
    alice = await authenticated_user("alice")
    bob = await authenticated_user("bob")
    admin = await authenticated_user("root", role=UserRole.ADMIN)
    await _create_todo(client, alice.headers, title="Alice one")
    await _create_todo(client, alice.headers, title="Alice two")
    await _create_todo(client, bob.headers, title="Bob one")

    alice_list = (await client.get("/api/todos", headers=alice.headers)).json()
    assert alice_list["meta"]["total"] == 2
    assert {todo["user_id"] for todo in alice_list["data"]} == {alice.id}

    bob_list = (await client.get("/api/todos", headers=bob.headers)).json()
    assert [todo["title"] for todo in bob_list["data"]] == ["Bob one"]

    admin_list = (await client.get("/api/todos", headers=admin.headers)).json()
    assert admin_list["meta"]["total"] == 3


async def test_pagination_metadata(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("pager")
    for index in range(7):
        await _create_todo(client, owner.headers, title=f"Task number {index}")

    for page, expected_count in ((1, 3), (2, 3), (3, 1), (4, 0)):
        response = await client.get(
            "/api/todos",
            params={"page": page, "limit": 3},
            headers=owner.headers,
        )
        assert response.status_code == 200
        payload = response.json()
        meta = payload["meta"]
        assert meta == {
            "total": 7,
            "count": expected_count,
            "limit": 3,
            "pages": math.ceil(7 / 3),
            "current_page": page,
        }
        assert len(payload["data"]) == meta["count"] <= meta["limit"]


async def test_empty_list_reports_one_page(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("empty")
    response = await client.get("/api/todos", headers=owner.headers)
    assert response.status_code == 200
    assert response.json() == {
        "data": [],
        "meta": {"total": 0, "count": 0, "limit": 10, "pages": 1, "current_page": 1},
    }


async def test_default_order_is_newest_first(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("orderer")
    titles = ["First entry", "Second entry", "Third entry"]
    for title in titles:
        await _create_todo(client, owner.headers, title=title)

    response = await client.get("/api/todos", headers=owner.headers)
    assert [todo["title"] for todo in response.json()["data"]] == list(reversed(titles))


async def test_sort_by_title_ascending(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("sorter")
    for title in ("Charlie", "alpha", "Bravo"):
        await _create_todo(client, owner.headers, title=title)

    response = await client.get(
        "/api/todos",
        params={"sort": "title", "order": "asc"},
        headers=owner.headers,
    )
    assert response.status_code == 200
    titles = [todo["title"] for todo in response.json()["data"]]
    assert titles == sorted(titles)


async def test_filters_and_search(client: AsyncClient, authenticated_user, create_category) -> None:
    owner = await authenticated_user("filterer")
    work = await create_category("Work")
    home = await create_category("Home")
    report = await _create_todo(client, owner.headers, title="Quarterly report", category_id=work.id)
    await _create_todo(client, owner.headers, title="Clean the kitchen", category_id=home.id)
    await _create_todo(client, owner.headers, title="100% done_list")
    await client.patch(f"/api/todos/{report['id']}/toggle", headers=owner.headers)

    by_category = await client.get("/api/todos", params={"category": work.id}, headers=owner.headers)
    assert [todo["title"] for todo in by_category.json()["data"]] == ["Quarterly report"]

    completed = await client.get("/api/todos", params={"completed": "true"}, headers=owner.headers)
    assert [todo["title"] for todo in completed.json()["data"]] == ["Quarterly report"]

    pending = await client.get("/api/todos", params={"completed": "false"}, headers=owner.headers)
    assert pending.json()["meta"]["total"] == 2

    search = await client.get("/api/todos", params={"search": "REPORT"}, headers=owner.headers)
    assert [todo["title"] for todo in search.json()["data"]] == ["Quarterly report"]

    wildcard = await client.get("/api/todos", params={"search": "%"}, headers=owner.headers)
    assert [todo["title"] for todo in wildcard.json()["data"]] == ["100% done_list"]


async def test_list_rejects_invalid_query_parameters(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("strict")

    for params in (
        {"sort": "priority"},
        {"order": "sideways"},
        {"page": 0},
        {"limit": 101},
        {"limit": 0},
        {"category": -1},
    ):
        response = await client.get("/api/todos", params=params, headers=owner.headers)
        assert response.status_code == 400, params
        payload = response.json()
        assert payload["message"] == "Validation failed"
        assert payload["errors"][0]["field"] == next(iter(params))


async def test_create_with_empty_title_is_rejected(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("validator")

    response = await client.post("/api/todos", json={"title": "   "}, headers=owner.headers)
    assert response.status_code == 400
    payload = response.json()
    assert payload["status"] == "error"
    assert [item["field"] for item in payload["errors"]] == ["title"]


async def test_create_with_unknown_category_is_rejected(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("categoriser")

    response = await client.post(
        "/api/todos",
        json={"title": "Orphaned todo", "category_id": 4242},
        headers=owner.headers,
    )
    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Category does not exist"}


async def test_update_validation_rules(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("updater")
    todo = await _create_todo(client, owner.headers, title="Tidy the desk")
    url = f"/api/todos/{todo['id']}"

    empty = await client.put(url, json={}, headers=owner.headers)
    assert empty.status_code == 400
    assert empty.json()["errors"][0]["message"] == "Provide at least one field to update"

    null_title = await client.put(url, json={"title": None}, headers=owner.headers)
    assert null_title.status_code == 400
    assert null_title.json()["errors"][0]["field"] == "title"

    string_flag = await client.put(url, json={"completed": "yes"}, headers=owner.headers)
    assert string_flag.status_code == 400
    assert string_flag.json()["errors"][0]["field"] == "completed"

    bad_date = await client.put(url, json={"due_date": "next tuesday"}, headers=owner.headers)
    assert bad_date.status_code == 400
    assert bad_date.json()["errors"][0]["field"] == "due_date"

    unknown_category = await client.put(url, json={"category_id": 999}, headers=owner.headers)
    assert unknown_category.status_code == 400
    assert unknown_category.json()["message"] == "Category does not exist"

    completed = await client.put(url, json={"completed": True}, headers=owner.headers)
    assert completed.status_code == 200
    assert completed.json()["completed"] is True
    assert completed.json()["title"] == "Tidy the desk"


async def test_malformed_todo_id_is_a_validation_error(client: AsyncClient, authenticated_user) -> None:
    owner = await authenticated_user("malformed")
    response = await client.get("/api/todos/not-a-uuid", headers=owner.headers)
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "todo_id"


async def test_todos_require_authentication(client: AsyncClient) -> None:
    response = await client.get("/api/todos")
    assert response.status_code == 401
    assert response.json()["message"] == "Authorization token is required"
