from __future__ import annotations
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional

from task_tracker.domain.errors import NotFound, StoreUnavailable, TaskStoreError
from task_tracker.domain.ports import TaskRepo
from task_tracker.domain.stats import TaskStats, aggregate_stats
from task_tracker.domain.task_models import Task, coerce_task_id, new_task_id
from task_tracker.domain.task_query import TaskQuery, build_query
from task_tracker.domain.timestamps import Clock, Timestamper, utc_now
from task_tracker.domain.validation import validate_and_build

logger = logging.getLogger("task_tracker.tasks")


@dataclass(frozen=True)
class TaskPage:
    items: List[Task]
    count: int


@contextmanager
def _store_call(operation: str) -> Iterator[None]:
    """Let taxonomy errors through; anything else from the store becomes StoreUnavailable."""
    try:
        yield
    except TaskStoreError:
        raise
    except Exception as exc:
        logger.exception(
            "store.error",
            extra={"category": "store", "event": "store.error", "operation": operation},
        )
        raise StoreUnavailable(operation) from exc


class TaskService:
    """
    Facade over the task store: validation, timestamps, queries and stats.

    The repo is injected and its connection lifecycle is someone else's
    business (see task_tracker.bootstrap).
    """

    def __init__(self, repo: TaskRepo, clock: Clock = utc_now):
        self.repo = repo
        self.timestamps = Timestamper(clock)

    async def create(self, payload: Mapping[str, Any]) -> Task:
        draft = validate_and_build(payload)
        created_at, updated_at = self.timestamps.for_create()
        task = Task(
            id=new_task_id(),
            created_at=created_at,
            updated_at=updated_at,
            **draft.model_dump(),
        )
        with _store_call("create"):
            stored = await self.repo.insert(task)
        logger.info(
            "task.create",
            extra={"category": "tasks", "event": "task.create", "task_id": stored.id, "title": stored.title},
        )
        return stored

    async def get(self, task_id: Any) -> Task:
        tid = coerce_task_id(task_id)
        with _store_call("get"):
            task = await self.repo.get(tid)
        if task is None:
            raise NotFound(tid)
        return task

    async def list(
        self,
        status: Optional[str] = None,
        priority: Optional[str] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
    ) -> TaskPage:
        query = build_query(status=status, priority=priority, sort_by=sort_by, order=order)
        with _store_call("list"):
            items = await self.repo.find_many(query)
        logger.debug(
            "task.list",
            extra={
                "category": "tasks",
                "event": "task.list",
                "status": query.status,
                "priority": query.priority,
                "sort_field": query.sort_field,
                "descending": query.descending,
                "count": len(items),
            },
        )
        return TaskPage(items=items, count=len(items))

    async def count(self, status: Optional[str] = None, priority: Optional[str] = None) -> int:
        query = build_query(status=status, priority=priority)
        with _store_call("count"):
            return await self.repo.count(query)

    async def update(self, task_id: Any, payload: Mapping[str, Any]) -> Task:
        # Full replacement: title is required again and omitted fields reset to defaults.
        draft = validate_and_build(payload)
        tid = coerce_task_id(task_id)
        with _store_call("update"):
            current = await self.repo.get(tid)
            if current is None:
                raise NotFound(tid)
            updated_at = self.timestamps.for_update(current.updated_at)
            updated = await self.repo.replace(tid, draft, updated_at)
        if updated is None:
            # removed between the read and the replace
            raise NotFound(tid)
        logger.info(
            "task.update",
            extra={"category": "tasks", "event": "task.update", "task_id": tid, "status": updated.status.value},
        )
        return updated

    async def remove(self, task_id: Any) -> Task:
        tid = coerce_task_id(task_id)
        with _store_call("remove"):
            removed = await self.repo.delete(tid)
        if removed is None:
            raise NotFound(tid)
        logger.info("task.remove", extra={"category": "tasks", "event": "task.remove", "task_id": tid})
        return removed

    async def stats(self) -> TaskStats:
        with _store_call("stats"):
            snapshot = await self.repo.find_many(TaskQuery())
        return aggregate_stats(snapshot)

    async def clear(self) -> int:
        with _store_call("clear"):
            n = await self.repo.delete_all()
        logger.info("task.clear", extra={"category": "tasks", "event": "task.clear", "removed": n})
        return n

    async def ping(self) -> bool:
        try:
            return await self.repo.ping()
        except Exception:
            logger.warning("store.ping_failed", extra={"category": "store", "event": "store.ping_failed"}, exc_info=True)
            return False
