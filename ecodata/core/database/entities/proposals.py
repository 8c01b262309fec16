"""
Project proposal and activity log entities.

Donors can propose projects from their dashboard; admins review them. Every
admin write is recorded in the activity log.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Text
from sqlmodel import Field

from ..base import Base, utc_now


class ProjectProposal(Base, table=True):
    """Project submitted by a donor for funding consideration.

    Table: project_proposals
    """

    __tablename__ = "project_proposals"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    title: str
    description: str = Field(sa_type=Text)
    category: str
    funding_needed: Optional[float] = Field(default=None)
    location: Optional[str] = Field(default=None)
    status: str = Field(default="pending")
    admin_notes: Optional[str] = Field(default=None, sa_type=Text)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ActivityLog(Base, table=True):
    """Audit record of an admin action.

    Table: activity_logs
    """

    __tablename__ = "activity_logs"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: Optional[int] = Field(default=None, index=True)
    action: str
    entity_type: str
    entity_id: Optional[int] = Field(default=None)
    details: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    created_at: datetime = Field(default_factory=utc_now)
