"""
Contact form and newsletter I/O models.

Both public forms carry a ``website`` honeypot field that real visitors never
see; a non-empty value marks the submission as spam.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import EmailStr, Field

from .common import ApiModel


class ContactMessageCreate(ApiModel):
    """Schema for the public contact form."""

    name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    subject: str = Field(min_length=2, max_length=200)
    message: str = Field(min_length=10, max_length=5000)
    consent: bool
    website: Optional[str] = Field(default=None, description="Honeypot; must be left empty")

    def is_spam(self) -> bool:
        return bool(self.website)


class ContactMessageRead(ApiModel):
    id: int
    name: str
    email: str
    subject: str
    message: str
    consent: bool
    is_read: bool
    created_at: datetime


class ContactReadStatus(ApiModel):
    is_read: bool


class NewsletterSubscribeRequest(ApiModel):
    """Schema for the public newsletter sign-up form."""

    email: EmailStr
    name: Optional[str] = Field(default=None, max_length=100)
    consent: bool
    subscription_tier: str = "basic"
    interests: List[str] = []
    website: Optional[str] = Field(default=None, description="Honeypot; must be left empty")

    def is_spam(self) -> bool:
        return bool(self.website)


class NewsletterSubscriberRead(ApiModel):
    id: int
    email: str
    name: Optional[str] = None
    consent: bool
    subscription_tier: str
    interests: List[str] = []
    created_at: datetime
