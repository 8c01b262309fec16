"""
Impact project entities.

Impact projects are plotted on the website map; timeline events record
milestones of a single project.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, utc_now


class ImpactProject(Base, table=True):
    """Project shown on the impact map.

    Table: impact_projects
    """

    __tablename__ = "impact_projects"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: str = Field(sa_type=Text)
    category: str = Field(index=True)
    status: str = Field(default="active")
    location: Optional[str] = Field(default=None)
    latitude: Optional[float] = Field(default=None)
    longitude: Optional[float] = Field(default=None)
    image_url: Optional[str] = Field(default=None)
    start_date: Optional[datetime] = Field(default=None)
    end_date: Optional[datetime] = Field(default=None)
    featured: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ImpactTimelineEvent(Base, table=True):
    """Dated milestone of an impact project.

    Table: impact_timeline_events
    """

    __tablename__ = "impact_timeline_events"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    project_id: int = Field(foreign_key="impact_projects.id", index=True)
    title: str
    description: str = Field(sa_type=Text)
    event_date: datetime
    image_url: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
