from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class TaskRow(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    status: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class DatabaseOrm:
    """
    SQLAlchemy async ORM holder. Create once and inject where needed.
    """

    def __init__(
        self,
        database_url: str,
        *,
        echo: bool = False,
        pool_pre_ping: bool = True,
    ) -> None:
        self._engine: AsyncEngine = create_async_engine(
            database_url, echo=echo, pool_pre_ping=pool_pre_ping
        )
        self._session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self._engine, expire_on_commit=False
        )
        self._disposed = False

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    async def create_schema(self) -> None:
        """Create missing tables directly from the ORM metadata (tests and local runs)."""
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema created", extra={"tables": sorted(Base.metadata.tables)})

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def dispose(self) -> None:
        await self._engine.dispose()
        self._disposed = True
