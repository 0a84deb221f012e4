import logging
from typing import cast

import inject
from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from src.setup.db_config import DatabaseSettings, get_database_settings
from src.setup.logging_config import configure_logging
from src.tracker.domain.repositories import TaskRepository
from src.tracker.infrastructure.database.orm import DatabaseOrm
from src.tracker.infrastructure.database.repositories import SqlAlchemyTaskRepository

logger = logging.getLogger(__name__)

_orm: DatabaseOrm | None = None


class AppSettings(BaseSettings):
    APP_NAME: str = "task-tracker"
    LOG_LEVEL: str = "INFO"

    model_config = ConfigDict(env_file=".env", extra="ignore")


def get_app_settings() -> AppSettings:
    return AppSettings()


async def configure_di(
    settings: DatabaseSettings | None = None,
    app_settings: AppSettings | None = None,
) -> TaskRepository:
    """
    Configure logging, build the database layer and bind it into the DI container.
    A database layer bound by an earlier call is disposed before it is replaced.
    """
    global _orm
    if settings is None:
        settings = get_database_settings()
    if app_settings is None:
        app_settings = get_app_settings()

    configure_logging(app_settings.LOG_LEVEL)

    await _dispose_current_orm()

    orm = DatabaseOrm(
        settings.DATABASE_URL,
        echo=settings.DATABASE_ECHO,
        pool_pre_ping=settings.DATABASE_POOL_PRE_PING,
    )
    repository = SqlAlchemyTaskRepository(orm)

    def _config(binder: inject.Binder) -> None:
        binder.bind(DatabaseOrm, orm)
        binder.bind(TaskRepository, repository)

    # clear=True lets tests and reloads swap the bindings.
    inject.configure(_config, clear=True)
    _orm = orm
    logger.info("Dependency container configured", extra={"app": app_settings.APP_NAME})
    return repository


async def shutdown_di() -> None:
    """Dispose the bound database layer and drop all bindings."""
    await _dispose_current_orm()
    inject.clear()


async def _dispose_current_orm() -> None:
    global _orm
    if _orm is None:
        return
    previous, _orm = _orm, None
    await previous.dispose()
    logger.info("Previous database engine disposed")


def get_task_repository() -> TaskRepository:
    return cast(TaskRepository, inject.instance(TaskRepository))
