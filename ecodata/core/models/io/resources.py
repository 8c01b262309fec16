"""
Case study, publication and FAQ I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import Field

from .blog import SLUG_PATTERN
from .common import ApiModel, NaiveUtcDatetime, PartialUpdate

# =====================================================================
# Case studies
# =====================================================================


class CaseStudyCreate(ApiModel):
    slug: str = Field(min_length=1, max_length=200, pattern=SLUG_PATTERN)
    title: str = Field(min_length=1)
    summary: str
    content: str
    sector: Optional[str] = None
    impact_type: Optional[str] = None
    location: Optional[str] = None
    cover_image: Optional[str] = None
    stats: Optional[Dict[str, Any]] = None
    publish_date: Optional[NaiveUtcDatetime] = None
    published: bool = False


class CaseStudyUpdate(PartialUpdate):
    slug: Optional[str] = Field(default=None, min_length=1, max_length=200, pattern=SLUG_PATTERN)
    title: Optional[str] = None
    summary: Optional[str] = None
    content: Optional[str] = None
    sector: Optional[str] = None
    impact_type: Optional[str] = None
    location: Optional[str] = None
    cover_image: Optional[str] = None
    stats: Optional[Dict[str, Any]] = None
    publish_date: Optional[NaiveUtcDatetime] = None
    published: Optional[bool] = None


class CaseStudyRead(CaseStudyCreate):
    id: int
    created_at: datetime
    updated_at: datetime


# =====================================================================
# Publications
# =====================================================================


class PublicationCreate(ApiModel):
    title: str = Field(min_length=1)
    summary: str
    authors: List[str] = []
    categories: List[str] = []
    publication_type: str = "report"
    publication_date: Optional[NaiveUtcDatetime] = None
    file_url: Optional[str] = None
    external_url: Optional[str] = None
    published: bool = False


class PublicationUpdate(PartialUpdate):
    title: Optional[str] = None
    summary: Optional[str] = None
    authors: Optional[List[str]] = None
    categories: Optional[List[str]] = None
    publication_type: Optional[str] = None
    publication_date: Optional[NaiveUtcDatetime] = None
    file_url: Optional[str] = None
    external_url: Optional[str] = None
    published: Optional[bool] = None


class PublicationRead(PublicationCreate):
    id: int
    created_at: datetime
    updated_at: datetime


# =====================================================================
# FAQs
# =====================================================================


class FaqCreate(ApiModel):
    question: str = Field(min_length=1)
    answer: str = Field(min_length=1)
    category: str = "general"
    display_order: int = 0


class FaqUpdate(PartialUpdate):
    question: Optional[str] = None
    answer: Optional[str] = None
    category: Optional[str] = None
    display_order: Optional[int] = None


class FaqRead(FaqCreate):
    id: int
    created_at: datetime
    updated_at: datetime
