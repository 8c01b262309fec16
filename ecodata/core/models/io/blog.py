"""
Blog post I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from .common import ApiModel, NaiveUtcDatetime, PartialUpdate

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class BlogPostCreate(ApiModel):
    """Schema for creating a blog post via API."""

    title: str = Field(min_length=1, max_length=300)
    slug: str = Field(min_length=1, max_length=200, pattern=SLUG_PATTERN, description="URL-safe unique identifier")
    content: str = Field(min_length=1)
    excerpt: str
    author_id: Optional[int] = Field(default=None, description="Defaults to the admin creating the post")
    featured_image: Optional[str] = None
    tags: List[str] = []
    category: str
    published: bool = False
    publish_date: Optional[NaiveUtcDatetime] = None


class BlogPostUpdate(PartialUpdate):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    slug: Optional[str] = Field(default=None, min_length=1, max_length=200, pattern=SLUG_PATTERN)
    content: Optional[str] = None
    excerpt: Optional[str] = None
    author_id: Optional[int] = None
    featured_image: Optional[str] = None
    tags: Optional[List[str]] = None
    category: Optional[str] = None
    published: Optional[bool] = None
    publish_date: Optional[NaiveUtcDatetime] = None


class BlogPostRead(BlogPostCreate):
    id: int
    created_at: datetime
    updated_at: datetime
