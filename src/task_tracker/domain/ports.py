from __future__ import annotations
from datetime import datetime
from typing import List, Optional, Protocol

from task_tracker.domain.task_models import Task, TaskDraft
from task_tracker.domain.task_query import TaskQuery


class TaskRepo(Protocol):
    """
    Persistent document store the task service writes through.

    Every call is atomic for the single document it touches. Implementations
    hand out copies; mutating a returned Task never changes stored state.
    """

    async def insert(self, task: Task) -> Task: ...

    async def get(self, task_id: str) -> Optional[Task]: ...

    async def find_many(self, query: TaskQuery) -> List[Task]: ...

    async def replace(self, task_id: str, draft: TaskDraft, updated_at: datetime) -> Optional[Task]:
        """Overwrite the writable fields; the stored updated_at becomes max(stored, updated_at)."""
        ...

    async def delete(self, task_id: str) -> Optional[Task]: ...

    async def count(self, query: TaskQuery) -> int: ...

    async def delete_all(self) -> int: ...

    async def ping(self) -> bool: ...
