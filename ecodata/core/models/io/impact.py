"""
Impact project and timeline event I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import ApiModel, NaiveUtcDatetime, PartialUpdate


class ImpactProjectCreate(ApiModel):
    title: str = Field(min_length=1)
    description: str
    category: str
    status: str = "active"
    location: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    image_url: Optional[str] = None
    start_date: Optional[NaiveUtcDatetime] = None
    end_date: Optional[NaiveUtcDatetime] = None
    featured: bool = False


class ImpactProjectUpdate(PartialUpdate):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    status: Optional[str] = None
    location: Optional[str] = None
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    image_url: Optional[str] = None
    start_date: Optional[NaiveUtcDatetime] = None
    end_date: Optional[NaiveUtcDatetime] = None
    featured: Optional[bool] = None


class ImpactProjectRead(ImpactProjectCreate):
    id: int
    created_at: datetime
    updated_at: datetime


class ImpactTimelineEventCreate(ApiModel):
    project_id: int
    title: str = Field(min_length=1)
    description: str
    event_date: NaiveUtcDatetime
    image_url: Optional[str] = None


class ImpactTimelineEventUpdate(PartialUpdate):
    project_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    event_date: Optional[NaiveUtcDatetime] = None
    image_url: Optional[str] = None


class ImpactTimelineEventRead(ImpactTimelineEventCreate):
    id: int
    created_at: datetime
    updated_at: datetime
