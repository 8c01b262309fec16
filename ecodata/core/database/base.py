"""
Base database models and utilities.

This module provides the foundational database components used across
all entities using SQLModel.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import ConfigDict
from sqlmodel import SQLModel


def utc_now() -> datetime:
    """Current UTC time as a naive datetime (columns are stored without tz)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Base(SQLModel):
    """Base class for all SQLModel entities."""

    model_config = ConfigDict(arbitrary_types_allowed=True)
