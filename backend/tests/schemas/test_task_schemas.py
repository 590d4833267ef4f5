"""Task Schemas — parse_task_input in full and partial mode.

Invariants:
    - Only the first violation is reported, as a client-ready message
    - Partial mode reports only fields actually sent
"""

import pytest

from task_manager.core.errors import ValidationError
from task_manager.schemas.task import (
    TaskCreate, TaskRead, TaskUpdate, parse_task_input,
)


def test_full_mode_accepts_title_and_color():
    data = parse_task_input({"title": "  Learn  ", "color": "blue"})
    assert isinstance(data, TaskCreate)
    assert data.title == "Learn"
    assert data.completed is None


def test_full_mode_ignores_unknown_fields():
    data = parse_task_input({"title": "x", "color": "y", "owner": "me"})
    assert not hasattr(data, "owner")


@pytest.mark.parametrize("payload, message, field", [
    ({"color": "blue"}, "Title is required", "title"),
    ({"title": "", "color": "blue"}, "Title is required", "title"),
    ({"title": "   ", "color": "blue"}, "Title is required", "title"),
    ({"title": "x"}, "Color is required", "color"),
])
def test_full_mode_required_fields(payload, message, field):
    with pytest.raises(ValidationError) as exc_info:
        parse_task_input(payload)
    assert exc_info.value.message == message
    assert exc_info.value.field == field


def test_full_mode_rejects_wrong_types():
    with pytest.raises(ValidationError) as exc_info:
        parse_task_input({"title": 42, "color": "blue"})
    assert exc_info.value.message.startswith("title:")


def test_completed_must_be_a_real_boolean():
    with pytest.raises(ValidationError) as exc_info:
        parse_task_input({"title": "x", "color": "y", "completed": "true"})
    assert exc_info.value.field == "completed"


def test_non_object_payload_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        parse_task_input("just a string")
    assert exc_info.value.message == "Request body must be a JSON object"


def test_only_first_violation_is_reported():
    with pytest.raises(ValidationError) as exc_info:
        parse_task_input({})
    assert exc_info.value.message == "Title is required"


def test_partial_mode_accepts_empty_payload():
    data = parse_task_input({}, partial=True)
    assert isinstance(data, TaskUpdate)
    assert data.changes() == {}


def test_partial_mode_reports_only_sent_fields():
    data = parse_task_input({"completed": False}, partial=True)
    assert data.changes() == {"completed": False}


def test_partial_mode_strips_title():
    data = parse_task_input({"title": "  Spaced  "}, partial=True)
    assert data.changes() == {"title": "Spaced"}


def test_partial_mode_rejects_blank_title():
    with pytest.raises(ValidationError) as exc_info:
        parse_task_input({"title": " "}, partial=True)
    assert exc_info.value.message == "Title is required"


def test_partial_mode_rejects_null():
    with pytest.raises(ValidationError) as exc_info:
        parse_task_input({"title": None}, partial=True)
    assert exc_info.value.message == "title cannot be null"


def test_task_read_from_attributes():
    class Row:
        id = 3
        title = "t"
        color = "c"
        completed = True

    assert TaskRead.model_validate(Row()).model_dump() == {
        "id": 3, "title": "t", "color": "c", "completed": True,
    }


@pytest.mark.parametrize("payload, field", [
    ({"title": "t" * 256, "color": "blue"}, "title"),
    ({"title": "ok", "color": "c" * 51}, "color"),
])
def test_full_mode_enforces_column_lengths(payload, field):
    with pytest.raises(ValidationError) as exc_info:
        parse_task_input(payload)
    assert exc_info.value.field == field
    assert exc_info.value.message.startswith(f"{field}:")


def test_partial_mode_enforces_column_lengths():
    with pytest.raises(ValidationError) as exc_info:
        parse_task_input({"title": "t" * 256}, partial=True)
    assert exc_info.value.field == "title"
