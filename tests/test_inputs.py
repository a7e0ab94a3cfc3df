from __future__ import annotations

from datetime import datetime, timezone

import pytest

from todo_api.errors import ValidationError
from todo_api.schemas.todo import TodoCreate, TodoUpdate
from todo_api.services.inputs import parse_todo_input


def test_full_input_is_trimmed_and_defaults_applied() -> None:
    payload = parse_todo_input({"title": "  Buy bread  ", "completed": True}, partial=False)
    assert isinstance(payload, TodoCreate)
    assert payload.title == "Buy bread"
    assert payload.category_id is None
    assert payload.due_date is None


def test_full_input_requires_title() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_todo_input({}, partial=False)
    assert [detail.field for detail in excinfo.value.details] == ["title"]


@pytest.mark.parametrize("title", ["", " a ", "x" * 121])
def test_title_length_is_enforced(title: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_todo_input({"title": title}, partial=False)
    assert excinfo.value.details[0].field == "title"


def test_due_date_is_parsed_from_iso_8601() -> None:
    payload = parse_todo_input({"title": "Dentist", "due_date": "2030-06-01T08:00:00Z"}, partial=False)
    assert payload.due_date == datetime(2030, 6, 1, 8, 0, tzinfo=timezone.utc)


def test_unparsable_due_date_is_a_field_error() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_todo_input({"title": "Dentist", "due_date": "soon"}, partial=False)
    assert excinfo.value.details[0].field == "due_date"


@pytest.mark.parametrize("category_id", [0, -1, "abc"])
def test_category_must_be_positive(category_id) -> None:
    with pytest.raises(ValidationError):
        parse_todo_input({"title": "Dentist", "category_id": category_id}, partial=False)


def test_partial_input_keeps_explicit_nulls_only() -> None:
    payload = parse_todo_input({"category_id": None, "completed": True}, partial=True)
    assert isinstance(payload, TodoUpdate)
    assert payload.changes() == {"category_id": None, "completed": True}


def test_partial_input_rejects_empty_payload() -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_todo_input({}, partial=True)
    assert excinfo.value.message == "Provide at least one field to update"


@pytest.mark.parametrize("field", ["title", "completed"])
def test_partial_input_rejects_null_for_required_fields(field: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        parse_todo_input({field: None}, partial=True)
    assert excinfo.value.details[0].field == field
    assert excinfo.value.details[0].message == f"{field} cannot be null"


def test_completed_must_be_a_real_boolean() -> None:
    with pytest.raises(ValidationError):
        parse_todo_input({"completed": "true"}, partial=True)
