from __future__ import annotations
from typing import Any, Mapping

from task_tracker.domain.errors import InvalidEnum, MissingField
from task_tracker.domain.task_models import TaskDraft, TaskPriority, TaskStatus, build_draft

PRIORITY_VALUES = [p.value for p in TaskPriority]
STATUS_VALUES = [s.value for s in TaskStatus]


def validate_payload(payload: Mapping[str, Any]) -> None:
    """Fail-fast checks run on every write payload, in this order: title, priority, status."""
    title = payload.get("title")
    if not isinstance(title, str) or not title.strip():
        raise MissingField("title")

    priority = payload.get("priority")
    if priority and priority not in PRIORITY_VALUES:
        raise InvalidEnum("priority", PRIORITY_VALUES)

    status = payload.get("status")
    if status and status not in STATUS_VALUES:
        raise InvalidEnum("status", STATUS_VALUES)


def validate_and_build(payload: Mapping[str, Any]) -> TaskDraft:
    validate_payload(payload)
    return build_draft(payload)
