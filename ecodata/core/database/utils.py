"""
Database utility functions for engine and session management.

Functions:
- normalize_database_url: Rewrites connection URLs to their async driver
- create_engine: Creates async SQLAlchemy engine with URL normalization
- create_sessionmaker: Creates async session factory with safe defaults
- create_all: Creates all tables from ORM metadata
- ping: Runs a trivial query to prove the connection works
"""

from __future__ import annotations

import re

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .base import Base

_ASYNC_DRIVERS = (
    (r"^postgres(?:ql)?(?:\+[a-z0-9_]+)?://", "postgresql+asyncpg://"),
    (r"^mssql(?:\+[a-z0-9_]+)?://", "mssql+aioodbc://"),
    (r"^sqlite(?:\+[a-z0-9_]+)?://", "sqlite+aiosqlite://"),
)


def normalize_database_url(db_url: str) -> str:
    """Rewrite a database URL so the async driver is used.

    ``postgres://`` and ``postgresql://`` become ``postgresql+asyncpg://``,
    ``mssql://`` becomes ``mssql+aioodbc://`` and ``sqlite://`` becomes
    ``sqlite+aiosqlite://``. Unknown schemes are returned unchanged.
    """
    for pattern, replacement in _ASYNC_DRIVERS:
        if re.match(pattern, db_url):
            return re.sub(pattern, replacement, db_url, count=1)
    return db_url


def create_engine(db_url: str) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    Args:
        db_url: Database connection URL

    Returns:
        Configured AsyncEngine instance
    """
    return create_async_engine(normalize_database_url(db_url), pool_pre_ping=True)


def create_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an ``async_sessionmaker`` with safe defaults for this project.

    Args:
        engine: Async SQLAlchemy engine

    Returns:
        Configured async session factory
    """
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_all(engine: AsyncEngine) -> None:
    """Create all tables for the current ORM metadata.

    Args:
        engine: Async SQLAlchemy engine
    """
    # Register every table on the metadata before creating it
    from . import entities  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def ping(engine: AsyncEngine) -> None:
    """Execute ``SELECT 1``; raises when the database is unreachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
