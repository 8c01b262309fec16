"""
Site content entity models.

Services, testimonials, impact metrics and partners are the small content
blocks managed from the admin screens. ``SiteSetting`` stores arbitrary JSON
values addressed by ``(section, key)``.
"""

from datetime import datetime
from typing import Any, Optional

from sqlalchemy import JSON, Text
from sqlmodel import Field

from ..base import Base, utc_now


class Service(Base, table=True):
    """Service offered by the organisation.

    Table: services
    """

    __tablename__ = "services"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    description: str = Field(sa_type=Text)
    icon: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Testimonial(Base, table=True):
    """Client testimonial shown on the home page.

    Table: testimonials
    """

    __tablename__ = "testimonials"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    position: str
    company: str
    testimonial: str = Field(sa_type=Text)
    rating: int
    image_url: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ImpactMetric(Base, table=True):
    """Headline impact figure (e.g. "247 tonnes" of carbon reduction).

    Table: impact_metrics
    """

    __tablename__ = "impact_metrics"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    value: str
    description: str = Field(sa_type=Text)
    icon: str
    category: str
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Partner(Base, table=True):
    """Partner organisation with its logo.

    Table: partners
    """

    __tablename__ = "partners"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    logo_url: str
    website_url: Optional[str] = Field(default=None)
    category: str = Field(default="technology")
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class SiteSetting(Base, table=True):
    """JSON value addressed by ``(section, key)``.

    Table: settings
    """

    __tablename__ = "settings"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    section: str = Field(index=True)
    key: str = Field(index=True)
    value: Any = Field(sa_type=JSON)
    updated_at: datetime = Field(default_factory=utc_now)
