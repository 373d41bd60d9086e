from __future__ import annotations
from datetime import datetime
from typing import Dict, List, Optional

from task_tracker.domain.task_models import Task, TaskDraft
from task_tracker.domain.task_query import TaskQuery


class InMemoryTaskRepo:
    """
    Dict-backed store, keyed by task id.

    Dicts keep insertion order, which doubles as the tie-breaker for sorting.
    Nothing here awaits, so each call runs to completion without interleaving.
    """

    def __init__(self):
        self._tasks: Dict[str, Task] = {}

    async def insert(self, task: Task) -> Task:
        self._tasks[task.id] = task.model_copy()
        return task.model_copy()

    async def get(self, task_id: str) -> Optional[Task]:
        task = self._tasks.get(task_id)
        return task.model_copy() if task else None

    async def find_many(self, query: TaskQuery) -> List[Task]:
        matched = [t for t in self._tasks.values() if query.matches(t)]
        # sorted() is stable with reverse=True too, so ties stay in insertion order
        matched = sorted(matched, key=query.sort_key, reverse=query.descending)
        return [t.model_copy() for t in matched]

    async def replace(self, task_id: str, draft: TaskDraft, updated_at: datetime) -> Optional[Task]:
        current = self._tasks.get(task_id)
        if current is None:
            return None
        # a replace that lands after a newer one keeps the newer updated_at
        stamp = max(current.updated_at, updated_at)
        updated = current.model_copy(update={**draft.model_dump(), "updated_at": stamp})
        self._tasks[task_id] = updated
        return updated.model_copy()

    async def delete(self, task_id: str) -> Optional[Task]:
        task = self._tasks.pop(task_id, None)
        return task.model_copy() if task else None

    async def count(self, query: TaskQuery) -> int:
        return sum(1 for t in self._tasks.values() if query.matches(t))

    async def delete_all(self) -> int:
        n = len(self._tasks)
        self._tasks.clear()
        return n

    async def ping(self) -> bool:
        return True
