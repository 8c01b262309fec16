"""
Visitor feedback and error report I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from .common import ApiModel


class FeedbackCreate(ApiModel):
    rating: int = Field(ge=1, le=5)
    feedback: str = Field(min_length=1, max_length=5000)
    category: str = "general"
    page_url: Optional[str] = None


class FeedbackResolution(ApiModel):
    resolved: bool
    admin_notes: Optional[str] = None


class FeedbackRead(ApiModel):
    id: int
    rating: int
    feedback: str
    category: str
    page_url: Optional[str] = None
    user_id: Optional[int] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    resolved: bool
    admin_notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ErrorReportCreate(ApiModel):
    email: Optional[EmailStr] = None
    error_details: str = Field(min_length=1, max_length=10000)
    current_page: Optional[str] = None
    browser_info: Optional[str] = None


class ErrorReportStatusUpdate(ApiModel):
    status: str = Field(min_length=1)
    admin_notes: Optional[str] = None


class ErrorReportRead(ApiModel):
    id: int
    email: Optional[str] = None
    error_details: str
    current_page: Optional[str] = None
    browser_info: Optional[str] = None
    status: str
    admin_notes: Optional[str] = None
    reported_at: datetime
    created_at: datetime
    updated_at: datetime
