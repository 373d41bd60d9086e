from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, String, case, delete, func, literal, literal_column, select, text, update
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from task_tracker.domain.task_models import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    Task,
    TaskDraft,
    TaskPriority,
    TaskStatus,
)
from task_tracker.domain.task_query import TaskQuery
from task_tracker.domain.timestamps import as_utc


class Base(DeclarativeBase):
    pass


class TaskRow(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    title: Mapped[str] = mapped_column(String(TITLE_MAX_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(String(DESCRIPTION_MAX_LENGTH), nullable=False, default="")
    priority: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def to_domain(self) -> Task:
        return Task(
            id=self.id,
            title=self.title,
            description=self.description or "",
            priority=TaskPriority(self.priority),
            status=TaskStatus(self.status),
            created_at=as_utc(self.created_at),
            updated_at=as_utc(self.updated_at),
        )


# rowid follows insert order, used as the tie-breaker for every sort
_INSERT_ORDER = literal_column("tasks.rowid")


def _where(stmt, query: TaskQuery):
    if query.status is not None:
        stmt = stmt.where(TaskRow.status == query.status)
    if query.priority is not None:
        stmt = stmt.where(TaskRow.priority == query.priority)
    return stmt


class SQLiteTaskRepo:
    def __init__(self, sessionmaker):
        self.sessionmaker = sessionmaker

    async def insert(self, task: Task) -> Task:
        row = TaskRow(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=task.priority.value,
            status=task.status.value,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
        async with self.sessionmaker() as session:
            session.add(row)
            await session.commit()
            return row.to_domain()

    async def get(self, task_id: str) -> Optional[Task]:
        async with self.sessionmaker() as session:
            row = await session.get(TaskRow, task_id)
            return row.to_domain() if row else None

    async def find_many(self, query: TaskQuery) -> List[Task]:
        stmt = _where(select(TaskRow), query)
        attr = query.sort_attr
        if attr is not None:
            column = getattr(TaskRow, attr)
            stmt = stmt.order_by(column.desc() if query.descending else column.asc())
        stmt = stmt.order_by(_INSERT_ORDER.asc())

        async with self.sessionmaker() as session:
            res = await session.execute(stmt)
            return [r.to_domain() for r in res.scalars().all()]

    async def replace(self, task_id: str, draft: TaskDraft, updated_at: datetime) -> Optional[Task]:
        stamp = literal(as_utc(updated_at), TaskRow.updated_at.type)
        stmt = (
            update(TaskRow)
            .where(TaskRow.id == task_id)
            .values(
                title=draft.title,
                description=draft.description,
                priority=draft.priority.value,
                status=draft.status.value,
                # a replace that lands after a newer one keeps the newer updated_at
                updated_at=case((TaskRow.updated_at > stamp, TaskRow.updated_at), else_=stamp),
            )
            .execution_options(synchronize_session=False)
        )
        async with self.sessionmaker() as session:
            res = await session.execute(stmt)
            if res.rowcount == 0:
                await session.rollback()
                return None
            # read back inside the same write transaction
            row = await session.get(TaskRow, task_id)
            task = row.to_domain()
            await session.commit()
            return task

    async def delete(self, task_id: str) -> Optional[Task]:
        async with self.sessionmaker() as session:
            row = await session.get(TaskRow, task_id)
            if row is None:
                return None
            task = row.to_domain()
            await session.delete(row)
            await session.commit()
            return task

    async def count(self, query: TaskQuery) -> int:
        stmt = _where(select(func.count(TaskRow.id)), query)
        async with self.sessionmaker() as session:
            res = await session.execute(stmt)
            return int(res.scalar_one())

    async def delete_all(self) -> int:
        async with self.sessionmaker() as session:
            res = await session.execute(delete(TaskRow))
            await session.commit()
            return int(res.rowcount or 0)

    async def ping(self) -> bool:
        async with self.sessionmaker() as session:
            await session.execute(text("SELECT 1"))
        return True
