from __future__ import annotations
from collections import Counter
from typing import Dict, Sequence

from pydantic import BaseModel, ConfigDict, Field

from task_tracker.domain.task_models import Task, TaskStatus


class TaskStats(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total: int
    completed: int
    pending: int
    in_progress: int = Field(alias="inProgress")
    # only priorities that occur at least once
    priority: Dict[str, int]

    def to_public(self) -> dict:
        return self.model_dump(by_alias=True)


def count_by_status(tasks: Sequence[Task], status: TaskStatus) -> int:
    return sum(1 for t in tasks if t.status == status)


def group_by_priority(tasks: Sequence[Task]) -> Dict[str, int]:
    return dict(Counter(t.priority.value for t in tasks))


def aggregate_stats(snapshot: Sequence[Task]) -> TaskStats:
    """Status counts and the priority grouping, both over the same snapshot."""
    return TaskStats(
        total=len(snapshot),
        completed=count_by_status(snapshot, TaskStatus.completed),
        pending=count_by_status(snapshot, TaskStatus.pending),
        in_progress=count_by_status(snapshot, TaskStatus.in_progress),
        priority=group_by_priority(snapshot),
    )
