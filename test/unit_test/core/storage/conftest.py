"""Test configuration for storage unit tests.

The ``storage`` fixture is parametrized so every facade test runs against
both the in-memory backend and a SQLite database.
"""

from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlmodel.pool import StaticPool

from ecodata.core.database import create_all, create_sessionmaker
from ecodata.core.storage import Storage, build_memory_storage, build_sql_storage

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(name="storage", params=["memory", "sqlite"])
async def storage_fixture(request) -> AsyncGenerator[Storage, None]:
    if request.param == "memory":
        yield build_memory_storage()
        return

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_all(engine)
    storage = build_sql_storage(session_factory=create_sessionmaker(engine), engine=engine, backend="sqlite")
    try:
        yield storage
    finally:
        await storage.close()
