"""
Async SQLAlchemy entity store.

``EntityStore`` owns the engine and session factory for one application (or
one test run).  It is built explicitly and disposed explicitly; nothing
here is a module-level singleton.

Backends
--------
* ``sqlite+aiosqlite:///:memory:`` (default) -- a single shared connection
  via ``StaticPool``.  That connection cannot isolate concurrent
  transactions, so units of work are serialized by an ``asyncio.Lock``.
* file-backed SQLite or ``postgresql+asyncpg://`` -- pooled connections;
  concurrent units of work rely on the database's own row locking.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Shared declarative base for all ORM models."""


def _is_memory_url(url: str) -> bool:
    return url.startswith("sqlite") and (":memory:" in url or url.rstrip("/").endswith(":"))


class EntityStore:
    def __init__(self, database_url: str, echo: bool = False):
        self.database_url = database_url
        self.in_memory = _is_memory_url(database_url)

        if self.in_memory:
            engine_kwargs = {
                "poolclass": StaticPool,
                "connect_args": {"check_same_thread": False},
            }
        elif database_url.startswith("sqlite"):
            engine_kwargs = {"connect_args": {"timeout": 30}}
        else:
            engine_kwargs = {"pool_size": 20, "max_overflow": 10}

        self.engine = create_async_engine(database_url, echo=echo, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._serial = asyncio.Lock() if self.in_memory else None

    async def create_all(self) -> None:
        # Import registers the tables on Base.metadata
        from . import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Schema ready (%s)", self.engine.url.render_as_string(hide_password=True))

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a unit of work; commit on success, rollback on error."""
        if self._serial is not None:
            async with self._serial:
                async with self._unit_of_work() as session:
                    yield session
        else:
            async with self._unit_of_work() as session:
                yield session

    @asynccontextmanager
    async def _unit_of_work(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
