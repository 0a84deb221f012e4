from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterator

import inject
import pytest
import pytest_asyncio

from src.setup.app_config import shutdown_di
from src.tracker.domain.models.task import Task
from src.tracker.infrastructure.database.orm import DatabaseOrm
from src.tracker.infrastructure.database.repositories import SqlAlchemyTaskRepository


def _build_task(status: str = "open", title: str = "Write report", **fields: object) -> Task:
    return Task(status=status, title=title, **fields)


@pytest.fixture
def make_task():
    """Factory for unsaved tasks with sensible defaults."""
    return _build_task


@pytest.fixture
def database_url(tmp_path) -> str:
    """File-backed SQLite so every session in a test sees the same database."""
    return f"sqlite+aiosqlite:///{tmp_path / 'tasks.db'}"


@pytest_asyncio.fixture
async def orm(database_url: str) -> AsyncIterator[DatabaseOrm]:
    orm = DatabaseOrm(database_url)
    await orm.create_schema()
    yield orm
    await orm.dispose()


@pytest.fixture
def repository(orm: DatabaseOrm) -> SqlAlchemyTaskRepository:
    return SqlAlchemyTaskRepository(orm)


@pytest.fixture
def env_settings(monkeypatch: pytest.MonkeyPatch, database_url: str) -> None:
    """Provide required environment variables for the settings classes."""
    monkeypatch.setenv("DATABASE_URL", database_url)
    monkeypatch.setenv("APP_NAME", "Test Tracker")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")


@pytest_asyncio.fixture
async def clean_injector() -> AsyncIterator[None]:
    inject.clear()
    yield
    await shutdown_di()


@pytest.fixture
def restore_root_logger() -> Iterator[logging.Logger]:
    """Undo root logger changes made by configure_logging."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    logging.captureWarnings(False)
