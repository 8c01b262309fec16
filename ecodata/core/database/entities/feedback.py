"""
Visitor feedback and error report entities.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import Text
from sqlmodel import Field

from ..base import Base, utc_now


class UserFeedback(Base, table=True):
    """Rating and comment left through the feedback widget.

    Table: user_feedback
    """

    __tablename__ = "user_feedback"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    rating: int
    feedback: str = Field(sa_type=Text)
    category: str = Field(default="general", index=True)
    page_url: Optional[str] = Field(default=None)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id")
    ip_address: Optional[str] = Field(default=None)
    user_agent: Optional[str] = Field(default=None)
    resolved: bool = Field(default=False, index=True)
    admin_notes: Optional[str] = Field(default=None, sa_type=Text)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ErrorReport(Base, table=True):
    """Problem reported by a visitor through the error widget.

    Table: error_reports
    """

    __tablename__ = "error_reports"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    email: Optional[str] = Field(default=None)
    error_details: str = Field(sa_type=Text)
    current_page: Optional[str] = Field(default=None)
    browser_info: Optional[str] = Field(default=None)
    status: str = Field(default="pending", index=True)
    admin_notes: Optional[str] = Field(default=None, sa_type=Text)
    reported_at: datetime = Field(default_factory=utc_now)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
