from __future__ import annotations

from datetime import UTC, datetime

from src.tracker.domain.models.task import Task
from src.tracker.infrastructure.database.orm import TaskRow


class OrmMapper:
    @staticmethod
    def to_task_row(task: Task) -> TaskRow:
        if task.created_at is None or task.updated_at is None:
            raise ValueError("Task timestamps are required to persist TaskRow.")
        return TaskRow(
            id=task.id,
            title=task.title,
            description=task.description,
            status=task.status,
            created_at=OrmMapper.as_utc(task.created_at),
            updated_at=OrmMapper.as_utc(task.updated_at),
        )

    @staticmethod
    def update_task_row(row: TaskRow, task: Task, updated_at: datetime) -> None:
        # id and created_at are fixed once the row exists.
        row.title = task.title
        row.description = task.description
        row.status = task.status
        row.updated_at = OrmMapper.as_utc(updated_at)

    @staticmethod
    def to_domain_task(row: TaskRow) -> Task:
        return Task(
            id=row.id,
            title=row.title,
            description=row.description,
            status=row.status,
            created_at=OrmMapper.as_utc(row.created_at),
            updated_at=OrmMapper.as_utc(row.updated_at),
        )

    @staticmethod
    def as_utc(value: datetime | None) -> datetime | None:
        # SQLite drops tzinfo on the way back; everything is written as UTC.
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value.astimezone(UTC)
