"""
Shared test fixtures.

Every test gets its own in-memory SQLite entity store (via aiosqlite), so
tests run without PostgreSQL and never share state.
"""

from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession

from rentals.infrastructure.database import EntityStore

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def store() -> AsyncGenerator[EntityStore, None]:
    """Create a fresh store with all tables; dispose it afterwards."""
    store = EntityStore(TEST_DB_URL)
    await store.create_all()
    yield store
    await store.dispose()


@pytest_asyncio.fixture
async def db_session(store: EntityStore) -> AsyncGenerator[AsyncSession, None]:
    """One unit of work spanning the whole test."""
    async with store.session() as session:
        yield session
