"""
Storage backend selection.

``init_storage`` walks the configured candidates in order (SQL Server, then
PostgreSQL) and returns the first one that can create its tables, seed and
answer a ping. In ``auto`` mode it falls back to seeded in-memory storage
when every database fails; in ``database`` mode it raises instead.
"""

from typing import List, Optional, Tuple

from ecodata.core.exceptions import StorageUnavailableError
from ecodata.core.logging_config import get_logger
from ecodata.server.core.config import AuthConfig, DatabaseConfig

from ..database import create_all, create_engine, create_sessionmaker, ping
from .bundle import Storage, build_memory_storage, build_sql_storage
from .seed import seed_storage

logger = get_logger(__name__)


def _candidates(db_config: DatabaseConfig) -> List[Tuple[str, str]]:
    candidates: List[Tuple[str, str]] = []
    if db_config.mssql_url:
        candidates.append(("mssql", db_config.mssql_url))
    if db_config.url:
        candidates.append(("postgres", db_config.url))
    return candidates


async def _connect(label: str, url: str, db_config: DatabaseConfig, auth_config: AuthConfig) -> Optional[Storage]:
    """Try one database; return the storage or None after logging the failure."""
    engine = None
    try:
        engine = create_engine(url)
        await ping(engine)
        await create_all(engine)
        storage = build_sql_storage(session_factory=create_sessionmaker(engine), engine=engine, backend=label)
        await seed_storage(storage, auth_config, demo=db_config.seed_demo_data)
        logger.info(f"Using {label} storage")
        return storage
    except Exception as e:
        logger.warning(f"{label} storage unavailable: {e}")
        if engine is not None:
            await engine.dispose()
        return None


async def init_storage(db_config: DatabaseConfig, auth_config: AuthConfig) -> Storage:
    """
    Build the storage backend selected by configuration.

    Args:
        db_config: Backend mode and database URLs
        auth_config: Default admin account to seed

    Returns:
        Ready-to-use, seeded ``Storage``

    Raises:
        StorageUnavailableError: ``STORAGE_BACKEND=database`` and no database could be used.
    """
    backend = db_config.backend.lower()
    if backend != "memory":
        for label, url in _candidates(db_config):
            storage = await _connect(label, url, db_config, auth_config)
            if storage is not None:
                return storage
        if backend == "database":
            raise StorageUnavailableError("No configured database could be initialised")
        logger.warning("Falling back to in-memory storage; data will not survive a restart")

    storage = build_memory_storage()
    await seed_storage(storage, auth_config, demo=True)
    logger.info("Using in-memory storage")
    return storage
