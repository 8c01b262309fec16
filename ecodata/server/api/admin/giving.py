"""
Admin view of donations and recurring subscriptions.
"""

from typing import List

from fastapi import APIRouter

from ecodata.core.exceptions import NotFoundError
from ecodata.core.logging_config import get_logger
from ecodata.core.models.io.payments import DonationRead, SubscriptionRead

from ..deps import AdminDep, PaymentServiceDep, StorageDep

logger = get_logger(__name__)

router = APIRouter()


@router.get("/donations", response_model=List[DonationRead], summary="List Donations")
async def list_donations(storage: StorageDep, admin: AdminDep):
    return await storage.list_donations()


@router.get("/subscriptions", response_model=List[SubscriptionRead], summary="List Subscriptions")
async def list_subscriptions(storage: StorageDep, admin: AdminDep):
    return await storage.list_subscriptions()


@router.post(
    "/subscriptions/{subscription_id}/cancel",
    response_model=SubscriptionRead,
    summary="Cancel Subscription",
    description="Cancel the subscription at Stripe (when it has a Stripe id) and mark it canceled locally.",
    responses={404: {"description": "Subscription not found"}, 503: {"description": "Stripe not configured"}},
)
async def cancel_subscription(
    subscription_id: int, storage: StorageDep, payments: PaymentServiceDep, admin: AdminDep
):
    subscription = await storage.get_subscription(subscription_id)
    if subscription is None:
        raise NotFoundError("Subscription not found")
    if subscription.stripe_subscription_id:
        await payments.cancel_subscription(subscription.stripe_subscription_id)
    canceled = await storage.cancel_subscription(subscription_id)
    await storage.log_activity(admin.user_id, "cancel", "subscription", subscription_id)
    logger.info(f"Subscription {subscription_id} canceled by user {admin.user_id}")
    return canceled
