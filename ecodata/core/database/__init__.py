"""
Database layer for ECODATA.

Structure:
- base.py: SQLModel base class and the naive-UTC clock
- entities/: Table models organized by business area
- utils.py: Engine and session factory helpers
"""

from .base import Base, utc_now
from .utils import (
    create_all,
    create_engine,
    create_sessionmaker,
    normalize_database_url,
    ping,
)

__all__ = [
    "Base",
    "create_all",
    "create_engine",
    "create_sessionmaker",
    "normalize_database_url",
    "ping",
    "utc_now",
]
