# tests/conftest.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
import pytest_asyncio

from task_tracker.config import Settings
from task_tracker.infra.db.sqlite import create_schema, make_engine, make_sessionmaker, make_sqlite_url
from task_tracker.infra.db.task_repo_memory import InMemoryTaskRepo
from task_tracker.infra.db.task_repo_sqlite import Base, SQLiteTaskRepo
from task_tracker.services.task_service import TaskService

T0 = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """
    Deterministic clock: every call returns a time one second after the previous one.

    `step` can be set negative to simulate a clock that jumps backwards.
    """

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start
        self.step = step
        self.calls = 0

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        self.calls += 1
        return now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings isolated under tmp_path; no .env, no log file."""
    return Settings(
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        task_store="memory",
        db_path=str(tmp_path / "tasks.db"),
    )


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def service(request, tmp_path: Path, clock: FakeClock):
    """
    TaskService over each store implementation.

    Both repos must behave identically for everything the service promises,
    so most service tests run once per backend.
    """
    if request.param == "memory":
        yield TaskService(InMemoryTaskRepo(), clock=clock)
        return

    engine = make_engine(make_sqlite_url(tmp_path / "tasks.db"))
    await create_schema(engine, Base.metadata)
    try:
        yield TaskService(SQLiteTaskRepo(make_sessionmaker(engine)), clock=clock)
    finally:
        await engine.dispose()
