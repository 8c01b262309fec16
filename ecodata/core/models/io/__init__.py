"""
API I/O models.

Pydantic request/response schemas, kept separate from the SQLModel entities
so the wire format (camelCase) can evolve independently of the tables.
"""

from .common import ApiModel, CreatedResponse, MessageResponse, NaiveUtcDatetime, PartialUpdate

__all__ = ["ApiModel", "CreatedResponse", "MessageResponse", "NaiveUtcDatetime", "PartialUpdate"]
