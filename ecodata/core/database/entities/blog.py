"""
Blog post entity model.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Text
from sqlmodel import Field

from ..base import Base, utc_now


class BlogPost(Base, table=True):
    """Blog article. Slugs are unique and address the public page.

    Table: blog_posts
    """

    __tablename__ = "blog_posts"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    slug: str = Field(index=True, unique=True)
    content: str = Field(sa_type=Text)
    excerpt: str
    author_id: Optional[int] = Field(default=None, foreign_key="users.id")
    featured_image: Optional[str] = Field(default=None)
    tags: List[str] = Field(default_factory=list, sa_type=JSON)
    category: str
    published: bool = Field(default=False, index=True)
    publish_date: Optional[datetime] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def sort_date(self) -> datetime:
        """Date used to order posts, newest first."""
        return self.publish_date or self.created_at
