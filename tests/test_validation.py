# tests/test_validation.py

from __future__ import annotations

import pytest

from task_tracker.domain.errors import InvalidEnum, MissingField, SchemaViolation
from task_tracker.domain.task_models import TaskPriority, TaskStatus, build_draft
from task_tracker.domain.validation import validate_and_build, validate_payload


@pytest.mark.parametrize("payload", [{}, {"title": ""}, {"title": "   \t\n"}, {"title": None}, {"title": 42}])
def test_missing_or_blank_title(payload) -> None:
    with pytest.raises(MissingField) as err:
        validate_payload(payload)
    assert err.value.field == "title"
    assert str(err.value) == "Title is required and cannot be empty"


def test_title_is_checked_before_enums() -> None:
    with pytest.raises(MissingField):
        validate_payload({"title": " ", "priority": "urgent", "status": "nope"})


def test_priority_checked_before_status() -> None:
    with pytest.raises(InvalidEnum) as err:
        validate_payload({"title": "x", "priority": "urgent", "status": "nope"})
    assert err.value.field == "priority"
    assert str(err.value) == "Priority must be low, medium, or high"


def test_invalid_status() -> None:
    with pytest.raises(InvalidEnum) as err:
        validate_payload({"title": "x", "status": "done"})
    assert err.value.field == "status"
    assert str(err.value) == "Status must be pending, in-progress, or completed"


def test_empty_enum_values_count_as_absent() -> None:
    draft = validate_and_build({"title": "x", "priority": "", "status": None})
    assert draft.priority is TaskPriority.medium
    assert draft.status is TaskStatus.pending


def test_build_draft_trims_and_defaults() -> None:
    draft = validate_and_build({"title": "  Write spec  ", "description": "  notes \n"})
    assert draft.title == "Write spec"
    assert draft.description == "notes"
    assert draft.priority is TaskPriority.medium
    assert draft.status is TaskStatus.pending


def test_missing_description_defaults_to_empty_string() -> None:
    assert validate_and_build({"title": "x", "description": None}).description == ""


def test_length_limits_apply_after_trimming() -> None:
    draft = validate_and_build({"title": "  " + "a" * 200 + "  ", "description": " " + "b" * 1000 + " "})
    assert len(draft.title) == 200
    assert len(draft.description) == 1000


def test_schema_violation_lists_every_offending_field() -> None:
    with pytest.raises(SchemaViolation) as err:
        validate_and_build({"title": "a" * 201, "description": "b" * 1001})
    assert err.value.fields == ["title", "description"]
    assert len(err.value.details) == 2


def test_non_text_description_is_a_schema_violation() -> None:
    with pytest.raises(SchemaViolation) as err:
        validate_and_build({"title": "x", "description": ["not", "text"]})
    assert err.value.fields == ["description"]


def test_build_draft_ignores_unknown_keys() -> None:
    draft = build_draft({"title": "x", "id": "spoofed", "createdAt": "yesterday"})
    assert draft.model_dump() == {
        "title": "x",
        "description": "",
        "priority": TaskPriority.medium,
        "status": TaskStatus.pending,
    }
