# tests/test_stats.py

from __future__ import annotations

import uuid

from task_tracker.domain.stats import aggregate_stats
from task_tracker.domain.task_models import Task, TaskPriority, TaskStatus

from .conftest import T0


def _task(status: TaskStatus, priority: TaskPriority) -> Task:
    return Task(
        id=str(uuid.uuid4()),
        title="t",
        status=status,
        priority=priority,
        created_at=T0,
        updated_at=T0,
    )


def test_empty_snapshot() -> None:
    stats = aggregate_stats([])
    assert stats.to_public() == {"total": 0, "completed": 0, "pending": 0, "inProgress": 0, "priority": {}}


def test_counts_and_priority_grouping() -> None:
    snapshot = [
        _task(TaskStatus.completed, TaskPriority.high),
        _task(TaskStatus.pending, TaskPriority.high),
        _task(TaskStatus.in_progress, TaskPriority.low),
        _task(TaskStatus.pending, TaskPriority.low),
        _task(TaskStatus.pending, TaskPriority.high),
    ]
    stats = aggregate_stats(snapshot)

    assert stats.total == 5
    assert (stats.completed, stats.pending, stats.in_progress) == (1, 3, 1)
    # medium never occurs, so it is left out rather than reported as 0
    assert stats.priority == {"high": 3, "low": 2}
    assert stats.total == stats.completed + stats.pending + stats.in_progress
    assert sum(stats.priority.values()) == stats.total
