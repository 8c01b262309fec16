"""
Resource library entities: case studies, publications and FAQs.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Text
from sqlmodel import Field

from ..base import Base, utc_now


class CaseStudy(Base, table=True):
    """Long-form case study addressed by a unique slug.

    Table: case_studies
    """

    __tablename__ = "case_studies"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    slug: str = Field(index=True, unique=True)
    title: str
    summary: str = Field(sa_type=Text)
    content: str = Field(sa_type=Text)
    sector: Optional[str] = Field(default=None)
    impact_type: Optional[str] = Field(default=None)
    location: Optional[str] = Field(default=None)
    cover_image: Optional[str] = Field(default=None)
    stats: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    publish_date: Optional[datetime] = Field(default=None)
    published: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Publication(Base, table=True):
    """Report, paper or guide available for download.

    Table: publications
    """

    __tablename__ = "publications"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    summary: str = Field(sa_type=Text)
    authors: List[str] = Field(default_factory=list, sa_type=JSON)
    categories: List[str] = Field(default_factory=list, sa_type=JSON)
    publication_type: str = Field(default="report")
    publication_date: Optional[datetime] = Field(default=None)
    file_url: Optional[str] = Field(default=None)
    external_url: Optional[str] = Field(default=None)
    published: bool = Field(default=False, index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class Faq(Base, table=True):
    """Frequently asked question.

    Table: faqs
    """

    __tablename__ = "faqs"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    question: str
    answer: str = Field(sa_type=Text)
    category: str = Field(default="general", index=True)
    display_order: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
