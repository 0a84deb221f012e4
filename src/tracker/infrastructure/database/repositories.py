from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from sqlalchemy import ColumnElement, Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.tracker.domain.exceptions import InvalidSortAttributeError, TaskNotFoundError
from src.tracker.domain.models.paging import PageRequest, SortDirection, SortOrder, TaskPage
from src.tracker.domain.models.task import Task
from src.tracker.domain.repositories import TaskRepository
from src.tracker.infrastructure.database.mappers import OrmMapper
from src.tracker.infrastructure.database.orm import DatabaseOrm, TaskRow

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {
    "id": TaskRow.id,
    "title": TaskRow.title,
    "status": TaskRow.status,
    "created_at": TaskRow.created_at,
    "updated_at": TaskRow.updated_at,
}


class SqlAlchemyTaskRepository(TaskRepository):
    """Relational task storage using SQLAlchemy async sessions."""

    def __init__(self, orm: DatabaseOrm) -> None:
        self._orm = orm

    async def save(self, task: Task) -> Task:
        """Insert or update a single task and return the stored version."""
        async with self._orm.session_factory() as session:
            async with session.begin():
                row = await self._persist(session, task, datetime.now(UTC))
        return OrmMapper.to_domain_task(row)

    async def save_all(self, tasks: Iterable[Task]) -> list[Task]:
        now = datetime.now(UTC)
        async with self._orm.session_factory() as session:
            async with session.begin():
                # One transaction: either every task is stored or none is.
                rows = [await self._persist(session, task, now) for task in tasks]
        return [OrmMapper.to_domain_task(row) for row in rows]

    async def find_by_id(self, task_id: int) -> Task | None:
        async with self._orm.session_factory() as session:
            row = await session.get(TaskRow, task_id)
        logger.debug("Task lookup", extra={"task_id": task_id, "found": row is not None})
        if row is None:
            return None
        return OrmMapper.to_domain_task(row)

    async def find_all(self, sort: list[SortOrder] | None = None) -> list[Task]:
        statement = select(TaskRow).order_by(*self._order_by(sort or []))
        return await self._fetch(statement)

    async def find_all_by_id(self, task_ids: Iterable[int]) -> list[Task]:
        ids = list(task_ids)
        if not ids:
            return []
        statement = select(TaskRow).where(TaskRow.id.in_(ids)).order_by(TaskRow.id)
        return await self._fetch(statement)

    async def find_page(self, page_request: PageRequest) -> TaskPage:
        return await self._fetch_page(page_request)

    async def find_by_status(self, status: str) -> list[Task]:
        """Exact, case-sensitive match on the status column."""
        statement = select(TaskRow).where(TaskRow.status == status).order_by(TaskRow.id)
        tasks = await self._fetch(statement)
        logger.debug("Tasks by status", extra={"status": status, "count": len(tasks)})
        return tasks

    async def find_by_status_page(self, status: str, page_request: PageRequest) -> TaskPage:
        return await self._fetch_page(page_request, TaskRow.status == status)

    async def count(self) -> int:
        return await self._count()

    async def count_by_status(self, status: str) -> int:
        return await self._count(TaskRow.status == status)

    async def exists_by_id(self, task_id: int) -> bool:
        statement = select(TaskRow.id).where(TaskRow.id == task_id)
        async with self._orm.session_factory() as session:
            result = await session.execute(statement)
            return result.scalar_one_or_none() is not None

    async def delete_by_id(self, task_id: int) -> None:
        await self._delete(TaskRow.id == task_id, task_id=task_id)

    async def delete_all_by_id(self, task_ids: Iterable[int]) -> None:
        ids = list(task_ids)
        if not ids:
            return
        await self._delete(TaskRow.id.in_(ids), task_ids=ids)

    async def delete_all(self) -> None:
        await self._delete(None)

    async def _persist(self, session: AsyncSession, task: Task, now: datetime) -> TaskRow:
        if task.id is None:
            stamped = task.model_copy(
                update={"created_at": task.created_at or now, "updated_at": now}
            )
            row = OrmMapper.to_task_row(stamped)
            session.add(row)
            # Flush so the engine assigns the primary key before commit.
            await session.flush()
            logger.info("Task created", extra={"task_id": row.id, "status": row.status})
            return row

        row = await session.get(TaskRow, task.id)
        if row is None:
            raise TaskNotFoundError(task.id)
        OrmMapper.update_task_row(row, task, now)
        await session.flush()
        logger.info("Task updated", extra={"task_id": row.id, "status": row.status})
        return row

    async def _fetch(self, statement: Select[tuple[TaskRow]]) -> list[Task]:
        async with self._orm.session_factory() as session:
            rows = await self._scalars(session, statement)
        return [OrmMapper.to_domain_task(row) for row in rows]

    async def _fetch_page(
        self,
        page_request: PageRequest,
        condition: ColumnElement[bool] | None = None,
    ) -> TaskPage:
        statement = select(TaskRow)
        if condition is not None:
            statement = statement.where(condition)
        statement = (
            statement.order_by(*self._order_by(page_request.sort))
            .limit(page_request.size)
            .offset(page_request.offset)
        )
        async with self._orm.session_factory() as session:
            async with session.begin():
                # Count and slice share one transaction so total matches items.
                total = await self._count_in(session, condition)
                rows: list[TaskRow] = []
                if page_request.offset < total:
                    rows = await self._scalars(session, statement)
        return TaskPage(
            items=[OrmMapper.to_domain_task(row) for row in rows],
            page=page_request.page,
            size=page_request.size,
            total=total,
        )

    async def _count(self, condition: ColumnElement[bool] | None = None) -> int:
        async with self._orm.session_factory() as session:
            return await self._count_in(session, condition)

    @staticmethod
    async def _count_in(session: AsyncSession, condition: ColumnElement[bool] | None) -> int:
        statement = select(func.count()).select_from(TaskRow)
        if condition is not None:
            statement = statement.where(condition)
        result = await session.execute(statement)
        return int(result.scalar_one())

    @staticmethod
    async def _scalars(session: AsyncSession, statement: Select[tuple[TaskRow]]) -> list[TaskRow]:
        result = await session.execute(statement)
        return list(result.scalars().all())

    async def _delete(self, condition: ColumnElement[bool] | None, **context: object) -> None:
        statement = delete(TaskRow)
        if condition is not None:
            statement = statement.where(condition)
        async with self._orm.session_factory() as session:
            async with session.begin():
                result = await session.execute(statement)
        logger.info("Tasks deleted", extra={"deleted": result.rowcount, **context})

    @staticmethod
    def _order_by(sort: list[SortOrder]) -> list[ColumnElement]:
        clauses: list[ColumnElement] = []
        for order in sort:
            column = SORTABLE_COLUMNS.get(order.attribute)
            if column is None:
                raise InvalidSortAttributeError(order.attribute, tuple(SORTABLE_COLUMNS))
            clauses.append(column.desc() if order.direction == SortDirection.DESC else column.asc())
        if not any(order.attribute == "id" for order in sort):
            # Stable tie-breaker keeps paging deterministic.
            clauses.append(TaskRow.id.asc())
        return clauses
