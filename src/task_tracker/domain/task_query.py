from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from task_tracker.domain.task_models import Task

ALL = "all"
DEFAULT_SORT_FIELD = "createdAt"
DEFAULT_SORT_ORDER = "desc"

# Public (camelCase) and attribute spellings both resolve to the model attribute.
SORTABLE_FIELDS = {
    "id": "id",
    "_id": "id",
    "title": "title",
    "description": "description",
    "priority": "priority",
    "status": "status",
    "createdAt": "created_at",
    "created_at": "created_at",
    "updatedAt": "updated_at",
    "updated_at": "updated_at",
}


@dataclass(frozen=True)
class TaskQuery:
    """
    Equality filters plus one sort key.

    `status`/`priority` of None mean "no constraint". `sort_field` is the name
    the caller asked for; `sort_attr` is None when that name does not map to a
    task attribute, in which case every record sorts as equal and the store's
    insertion order is kept.
    """

    status: Optional[str] = None
    priority: Optional[str] = None
    sort_field: str = DEFAULT_SORT_FIELD
    descending: bool = True

    @property
    def sort_attr(self) -> Optional[str]:
        return SORTABLE_FIELDS.get(self.sort_field)

    def matches(self, task: Task) -> bool:
        if self.status is not None and task.status.value != self.status:
            return False
        if self.priority is not None and task.priority.value != self.priority:
            return False
        return True

    def sort_key(self, task: Task) -> Any:
        attr = self.sort_attr
        if attr is None:
            return 0
        value = getattr(task, attr)
        return getattr(value, "value", value)


def _filter_value(raw: Optional[str]) -> Optional[str]:
    if raw is None or raw == "" or raw == ALL:
        return None
    return str(raw)


def build_query(
    status: Optional[str] = None,
    priority: Optional[str] = None,
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
) -> TaskQuery:
    """Translate client list parameters into a TaskQuery. Anything but "asc" sorts descending."""
    return TaskQuery(
        status=_filter_value(status),
        priority=_filter_value(priority),
        sort_field=sort_by or DEFAULT_SORT_FIELD,
        descending=(order or DEFAULT_SORT_ORDER) != "asc",
    )
