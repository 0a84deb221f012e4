from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from src.tracker.domain.models.paging import PageRequest, SortOrder, TaskPage
from src.tracker.domain.models.task import Task


class TaskRepository(ABC):
    """Repository contract for persisting and querying tasks."""

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """Insert a task without an id, or overwrite the stored task with the same id."""

    @abstractmethod
    async def save_all(self, tasks: Iterable[Task]) -> list[Task]:
        """Save several tasks in one transaction, preserving input order."""

    @abstractmethod
    async def find_by_id(self, task_id: int) -> Task | None:
        """Return the task with ``task_id`` or ``None`` when it does not exist."""

    @abstractmethod
    async def find_all(self, sort: list[SortOrder] | None = None) -> list[Task]:
        """Return every stored task."""

    @abstractmethod
    async def find_all_by_id(self, task_ids: Iterable[int]) -> list[Task]:
        """Return the stored tasks among ``task_ids``; unknown ids are skipped."""

    @abstractmethod
    async def find_page(self, page_request: PageRequest) -> TaskPage:
        """Return one page of tasks."""

    @abstractmethod
    async def find_by_status(self, status: str) -> list[Task]:
        """Return all tasks whose status equals ``status`` exactly."""

    @abstractmethod
    async def find_by_status_page(self, status: str, page_request: PageRequest) -> TaskPage:
        """Return one page of tasks whose status equals ``status`` exactly."""

    @abstractmethod
    async def count(self) -> int:
        """Return the number of stored tasks."""

    @abstractmethod
    async def count_by_status(self, status: str) -> int:
        """Return the number of tasks whose status equals ``status`` exactly."""

    @abstractmethod
    async def exists_by_id(self, task_id: int) -> bool:
        """Return whether a task with ``task_id`` is stored."""

    @abstractmethod
    async def delete_by_id(self, task_id: int) -> None:
        """Delete the task with ``task_id``; a missing id is a no-op."""

    @abstractmethod
    async def delete_all_by_id(self, task_ids: Iterable[int]) -> None:
        """Delete every task among ``task_ids``; missing ids are ignored."""

    @abstractmethod
    async def delete_all(self) -> None:
        """Delete every stored task."""
