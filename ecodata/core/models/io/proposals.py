"""
Project proposal and activity log I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from .common import ApiModel


class ProjectProposalCreate(ApiModel):
    title: str = Field(min_length=3, max_length=200)
    description: str = Field(min_length=10)
    category: str
    funding_needed: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = None


class ProposalStatusUpdate(ApiModel):
    status: str = Field(min_length=1)
    admin_notes: Optional[str] = None


class ProjectProposalRead(ProjectProposalCreate):
    id: int
    user_id: Optional[int] = None
    status: str
    admin_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ActivityLogRead(ApiModel):
    id: int
    user_id: Optional[int] = None
    action: str
    entity_type: str
    entity_id: Optional[int] = None
    details: Optional[Dict[str, Any]] = None
    created_at: datetime
