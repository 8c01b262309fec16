"""
Shared I/O model base classes.

The website frontend speaks camelCase JSON while entities use snake_case
attributes. ``ApiModel`` bridges the two: it reads entities through
``from_attributes``, accepts either spelling on input and FastAPI serializes
responses by alias.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Dict

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


# Stored timestamps are naive UTC; client dates such as "2024-05-01T09:00:00Z" are converted on input
NaiveUtcDatetime = Annotated[datetime, AfterValidator(_to_naive_utc)]


class ApiModel(BaseModel):
    """Base for every request and response schema."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class PartialUpdate(ApiModel):
    """Base for PATCH-style update bodies where every field is optional."""

    def changes(self) -> Dict[str, Any]:
        """Fields the client actually sent; explicit nulls leave the stored value unchanged."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class MessageResponse(ApiModel):
    """Plain ``{"message": ...}`` acknowledgement."""

    message: str


class CreatedResponse(MessageResponse):
    """Acknowledgement of a public form submission with the new record id."""

    id: int
