"""
Donation, subscription and checkout I/O models.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import Field

from .common import ApiModel


class GiftAidDeclaration(ApiModel):
    is_gift_aid: bool = False
    gift_aid_name: Optional[str] = None
    gift_aid_address: Optional[str] = None
    gift_aid_postcode: Optional[str] = None


class CheckoutRequest(GiftAidDeclaration):
    """One-off donation; amount in pounds."""

    amount: float
    email: Optional[str] = None
    name: Optional[str] = None
    funding_goal_id: Optional[str] = None


class PaymentIntentRequest(CheckoutRequest):
    pass


class SubscriptionCheckoutRequest(GiftAidDeclaration):
    """Recurring donation; ``interval`` is ``month`` or ``year``."""

    amount: float
    interval: str = "month"
    email: Optional[str] = None
    name: Optional[str] = None
    tier: Optional[str] = None


class CheckoutSession(ApiModel):
    url: str
    session_id: str


class PaymentIntentResponse(ApiModel):
    client_secret: str
    payment_intent_id: str


class SubscriptionDetails(ApiModel):
    id: str
    status: str
    current_period_end: Optional[datetime] = None
    interval: Optional[str] = None


class CheckoutVerification(ApiModel):
    status: Optional[str] = None
    payment_status: Optional[str] = None
    amount: Optional[str] = None
    currency: Optional[str] = None
    customer_email: Optional[str] = None
    customer_name: Optional[str] = None
    mode: Optional[str] = None
    subscription: Optional[SubscriptionDetails] = None


class WebhookAck(ApiModel):
    received: bool = True


class DonationRead(GiftAidDeclaration):
    id: int
    amount: float
    currency: str
    email: Optional[str] = None
    name: Optional[str] = None
    funding_goal_id: Optional[str] = None
    stripe_payment_id: Optional[str] = None
    stripe_session_id: Optional[str] = None
    status: str
    payment_details: Optional[Dict[str, Any]] = None
    user_id: Optional[int] = None
    created_at: datetime


class SubscriptionRead(GiftAidDeclaration):
    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    amount: float
    currency: str
    interval: str
    tier: Optional[str] = None
    status: str
    current_period_end: Optional[datetime] = None
    canceled_at: Optional[datetime] = None
    user_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class DonorSummary(ApiModel):
    """Totals shown at the top of the donor dashboard."""

    total_donated: float = Field(description="Sum of completed one-off donations in pounds")
    donation_count: int
    active_subscriptions: int
    monthly_commitment: float = Field(description="Active recurring gifts normalised to a monthly amount")
    has_used_free_consultation: bool
