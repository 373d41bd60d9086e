from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Any, Mapping
import uuid

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from task_tracker.domain.errors import InvalidIdentifier, SchemaViolation

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in-progress"
    completed = "completed"


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


class TaskDraft(BaseModel):
    """The writable part of a task, after trimming and defaulting."""

    model_config = ConfigDict(extra="ignore")

    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    priority: TaskPriority = TaskPriority.medium
    status: TaskStatus = TaskStatus.pending


class Task(TaskDraft):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    def to_public(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


def new_task_id() -> str:
    return str(uuid.uuid4())


def coerce_task_id(raw: object) -> str:
    """Canonical id text, or InvalidIdentifier if the store could not interpret it."""
    if isinstance(raw, uuid.UUID):
        return str(raw)
    if not isinstance(raw, str):
        raise InvalidIdentifier(raw)
    try:
        return str(uuid.UUID(raw.strip()))
    except ValueError:
        raise InvalidIdentifier(raw) from None


def _trimmed(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def build_draft(payload: Mapping[str, Any]) -> TaskDraft:
    """
    Turn a raw payload into a TaskDraft.

    Empty or missing optional fields fall back to their defaults. Length and
    type problems are collected into a single SchemaViolation.
    """
    fields: dict[str, Any] = {"title": _trimmed(payload.get("title"))}

    description = _trimmed(payload.get("description"))
    if description:
        fields["description"] = description

    for name in ("priority", "status"):
        value = payload.get(name)
        if value:
            fields[name] = value

    try:
        return TaskDraft(**fields)
    except pydantic.ValidationError as exc:
        errors = exc.errors()
        raise SchemaViolation(
            [str(err["loc"][0]) for err in errors if err.get("loc")],
            [f"{err['loc'][0]}: {err['msg']}" for err in errors if err.get("loc")],
        ) from None
