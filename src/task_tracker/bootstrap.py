from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from task_tracker.config import Settings
from task_tracker.infra.db.sqlite import create_schema, make_engine, make_sessionmaker, make_sqlite_url
from task_tracker.infra.db.task_repo_memory import InMemoryTaskRepo
from task_tracker.infra.db.task_repo_sqlite import Base, SQLiteTaskRepo
from task_tracker.services.task_service import TaskService

logger = logging.getLogger("task_tracker.system")


@asynccontextmanager
async def open_task_service(settings: Settings) -> AsyncIterator[TaskService]:
    """
    Own the store connection for the lifetime of the block.

    The TaskService only ever sees the repo; creating the schema and disposing
    the engine happen here.
    """
    if settings.task_store == "memory":
        logger.info("db.ready", extra={"category": "system", "event": "db.ready", "store": "memory"})
        yield TaskService(InMemoryTaskRepo())
        return

    engine = make_engine(make_sqlite_url(settings.db_path))
    try:
        await create_schema(engine, Base.metadata)
        logger.info(
            "db.ready",
            extra={"category": "system", "event": "db.ready", "store": "sqlite", "db_path": settings.db_path},
        )
        yield TaskService(SQLiteTaskRepo(make_sessionmaker(engine)))
    finally:
        await engine.dispose()
        logger.info("db.closed", extra={"category": "system", "event": "db.closed"})
