"""
Persistence layer.

Route handlers depend on ``Storage``; which backend sits behind it (in-memory
dictionaries or a SQL database) is decided once at startup by
``init_storage``.
"""

from .bundle import Storage, build_memory_storage, build_sql_storage
from .factory import init_storage
from .interfaces import EntityRepository
from .memory import InMemoryRepository
from .sql import SqlRepository

__all__ = [
    "EntityRepository",
    "InMemoryRepository",
    "SqlRepository",
    "Storage",
    "build_memory_storage",
    "build_sql_storage",
    "init_storage",
]
