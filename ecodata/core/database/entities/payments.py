"""
Donation entity models.

One-off gifts are stored as ``Donation`` rows and recurring gifts as
``Subscription`` rows. Both are written by the Stripe webhook and optionally
linked to the donor's account so the dashboard can list them. Amounts are in
pounds.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import JSON
from sqlmodel import Field

from ..base import Base, utc_now


class GiftAidFields(Base):
    """UK Gift Aid declaration captured at checkout."""

    is_gift_aid: bool = Field(default=False)
    gift_aid_name: Optional[str] = Field(default=None)
    gift_aid_address: Optional[str] = Field(default=None)
    gift_aid_postcode: Optional[str] = Field(default=None)


class Donation(GiftAidFields, table=True):
    """One-off donation.

    Table: donations
    """

    __tablename__ = "donations"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    amount: float
    currency: str = Field(default="gbp")
    email: Optional[str] = Field(default=None, index=True)
    name: Optional[str] = Field(default=None)
    funding_goal_id: Optional[str] = Field(default=None)
    stripe_payment_id: Optional[str] = Field(default=None)
    stripe_session_id: Optional[str] = Field(default=None, index=True)
    status: str = Field(default="pending")
    payment_details: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)


class Subscription(GiftAidFields, table=True):
    """Recurring (monthly or yearly) donation.

    Table: subscriptions
    """

    __tablename__ = "subscriptions"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    email: Optional[str] = Field(default=None, index=True)
    name: Optional[str] = Field(default=None)
    stripe_customer_id: Optional[str] = Field(default=None)
    stripe_subscription_id: Optional[str] = Field(default=None, index=True)
    amount: float
    currency: str = Field(default="gbp")
    interval: str = Field(default="month")
    tier: Optional[str] = Field(default=None)
    status: str = Field(default="active")
    current_period_end: Optional[datetime] = Field(default=None)
    canceled_at: Optional[datetime] = Field(default=None)
    payment_details: Optional[Dict[str, Any]] = Field(default=None, sa_type=JSON)
    user_id: Optional[int] = Field(default=None, foreign_key="users.id", index=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
