"""
Site content I/O models: services, testimonials, impact metrics, partners
and settings.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from .common import ApiModel, PartialUpdate

# =====================================================================
# Services
# =====================================================================


class ServiceCreate(ApiModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    icon: str = Field(min_length=1, description="Font Awesome icon class, e.g. 'fa-chart-line'")


class ServiceUpdate(PartialUpdate):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None
    icon: Optional[str] = None


class ServiceRead(ServiceCreate):
    id: int
    created_at: datetime
    updated_at: datetime


# =====================================================================
# Testimonials
# =====================================================================


class TestimonialCreate(ApiModel):
    name: str = Field(min_length=1)
    position: str
    company: str
    testimonial: str = Field(min_length=1)
    rating: int = Field(ge=1, le=5)
    image_url: Optional[str] = None


class TestimonialUpdate(PartialUpdate):
    name: Optional[str] = None
    position: Optional[str] = None
    company: Optional[str] = None
    testimonial: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    image_url: Optional[str] = None


class TestimonialRead(TestimonialCreate):
    id: int
    created_at: datetime
    updated_at: datetime


# =====================================================================
# Impact metrics
# =====================================================================


class ImpactMetricCreate(ApiModel):
    title: str = Field(min_length=1)
    value: str = Field(min_length=1, description="Display value, e.g. '247 tonnes'")
    description: str
    icon: str
    category: str


class ImpactMetricUpdate(PartialUpdate):
    title: Optional[str] = None
    value: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None
    category: Optional[str] = None


class ImpactMetricRead(ImpactMetricCreate):
    id: int
    created_at: datetime
    updated_at: datetime


# =====================================================================
# Partners
# =====================================================================


class PartnerCreate(ApiModel):
    name: str = Field(min_length=1)
    logo_url: str = Field(min_length=1)
    website_url: Optional[str] = None
    category: str = "technology"


class PartnerUpdate(PartialUpdate):
    name: Optional[str] = None
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    category: Optional[str] = None


class PartnerRead(PartnerCreate):
    id: int
    created_at: datetime
    updated_at: datetime


# =====================================================================
# Settings
# =====================================================================


class SettingUpsert(ApiModel):
    section: str = Field(min_length=1)
    key: str = Field(min_length=1)
    value: Any


class SettingRead(SettingUpsert):
    id: int
    updated_at: datetime
