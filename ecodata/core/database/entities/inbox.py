"""
Inbound form entities: contact messages and newsletter subscribers.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Text
from sqlmodel import Field

from ..base import Base, utc_now


class ContactMessage(Base, table=True):
    """Message submitted through the contact form.

    Table: contact_messages
    """

    __tablename__ = "contact_messages"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    email: str
    subject: str
    message: str = Field(sa_type=Text)
    consent: bool
    is_read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)


class NewsletterSubscriber(Base, table=True):
    """Newsletter mailing list entry. Email addresses are unique.

    Table: newsletter_subscribers
    """

    __tablename__ = "newsletter_subscribers"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: Optional[str] = Field(default=None)
    consent: bool
    subscription_tier: str = Field(default="basic")
    interests: List[str] = Field(default_factory=list, sa_type=JSON)
    created_at: datetime = Field(default_factory=utc_now)
