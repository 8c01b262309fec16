"""
Stripe webhook event handling.

Turns verified webhook events into donation and subscription records. Each
handler is idempotent so Stripe retries do not create duplicates.
"""

import math
from typing import Any, Awaitable, Callable, Dict, Optional

from ecodata.core.database.entities import Donation, Subscription
from ecodata.core.logging_config import get_logger
from ecodata.core.monitoring import log_payment_event
from ecodata.core.storage import Storage

from .payments import PaymentService, from_timestamp, subscription_interval, subscription_period_end

logger = get_logger(__name__)

CANCELED_STATUSES = ("canceled", "unpaid")

EventHandler = Callable[[Storage, PaymentService, Dict[str, Any]], Awaitable[None]]


def _gift_aid_fields(metadata: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "is_gift_aid": metadata.get("isGiftAid") == "true",
        "gift_aid_name": metadata.get("giftAidName") or None,
        "gift_aid_address": metadata.get("giftAidAddress") or None,
        "gift_aid_postcode": metadata.get("giftAidPostcode") or None,
    }


def _session_amount(session: Dict[str, Any], metadata: Dict[str, Any]) -> float:
    if metadata.get("donationAmount"):
        try:
            amount = float(metadata["donationAmount"])
        except (TypeError, ValueError):
            logger.warning(f"Ignoring unparseable donationAmount metadata: {metadata['donationAmount']!r}")
        else:
            if math.isfinite(amount):
                return amount
    return (session.get("amount_total") or 0) / 100


def _session_donor(session: Dict[str, Any], metadata: Dict[str, Any]) -> Dict[str, Optional[str]]:
    customer = session.get("customer_details") or {}
    return {
        "email": customer.get("email") or session.get("customer_email") or metadata.get("email") or None,
        "name": customer.get("name") or metadata.get("name") or None,
    }


async def _linked_user_id(storage: Storage, email: Optional[str]) -> Optional[int]:
    if not email:
        return None
    user = await storage.get_user_by_email(email)
    return user.id if user is not None else None


async def _record_donation(storage: Storage, session: Dict[str, Any]) -> None:
    session_id = session["id"]
    if await storage.get_donation_by_session_id(session_id) is not None:
        logger.info(f"Donation for session {session_id} already recorded")
        return
    metadata = session.get("metadata") or {}
    donor = _session_donor(session, metadata)
    amount = _session_amount(session, metadata)
    donation = await storage.create_donation(
        Donation(
            amount=amount,
            currency=session.get("currency") or "gbp",
            email=donor["email"],
            name=donor["name"],
            funding_goal_id=metadata.get("goalId") or None,
            stripe_payment_id=session.get("payment_intent"),
            stripe_session_id=session_id,
            status="completed",
            payment_details={"customer_details": session.get("customer_details")},
            user_id=await _linked_user_id(storage, donor["email"]),
            **_gift_aid_fields(metadata),
        )
    )
    log_payment_event("donation.completed", session_id, amount)
    logger.info(f"Recorded donation {donation.id} of £{amount:.2f} for session {session_id}")


async def _record_subscription(storage: Storage, payments: PaymentService, session: Dict[str, Any]) -> None:
    stripe_subscription_id = session.get("subscription")
    if not stripe_subscription_id:
        logger.warning(f"Subscription checkout {session['id']} completed without a subscription id")
        return
    if await storage.get_subscription_by_stripe_id(stripe_subscription_id) is not None:
        logger.info(f"Subscription {stripe_subscription_id} already recorded")
        return
    stripe_subscription = await payments.retrieve_subscription(stripe_subscription_id)
    metadata = session.get("metadata") or {}
    donor = _session_donor(session, metadata)
    amount = _session_amount(session, metadata)
    subscription = await storage.create_subscription(
        Subscription(
            email=donor["email"],
            name=donor["name"],
            stripe_customer_id=session.get("customer"),
            stripe_subscription_id=stripe_subscription_id,
            amount=amount,
            currency=session.get("currency") or "gbp",
            interval=metadata.get("interval") or subscription_interval(stripe_subscription) or "month",
            tier=metadata.get("tier") or None,
            status=stripe_subscription.get("status") or "active",
            current_period_end=from_timestamp(subscription_period_end(stripe_subscription)),
            user_id=await _linked_user_id(storage, donor["email"]),
            **_gift_aid_fields(metadata),
        )
    )
    log_payment_event("subscription.created", stripe_subscription_id, amount)
    logger.info(f"Recorded subscription {subscription.id} ({stripe_subscription_id})")


async def handle_checkout_completed(storage: Storage, payments: PaymentService, session: Dict[str, Any]) -> None:
    if session.get("mode") == "subscription":
        await _record_subscription(storage, payments, session)
    else:
        await _record_donation(storage, session)


def _invoice_subscription_id(invoice: Dict[str, Any]) -> Optional[str]:
    if invoice.get("subscription"):
        return invoice["subscription"]
    details = (invoice.get("parent") or {}).get("subscription_details") or {}
    return details.get("subscription")


async def handle_invoice_paid(storage: Storage, payments: PaymentService, invoice: Dict[str, Any]) -> None:
    stripe_subscription_id = _invoice_subscription_id(invoice)
    if not stripe_subscription_id:
        return
    subscription = await storage.get_subscription_by_stripe_id(stripe_subscription_id)
    if subscription is None:
        logger.warning(f"Invoice paid for unknown subscription {stripe_subscription_id}")
        return
    await storage.update_subscription_status(subscription.id, "active")
    log_payment_event("invoice.paid", stripe_subscription_id, (invoice.get("amount_paid") or 0) / 100)


async def handle_subscription_changed(
    storage: Storage, payments: PaymentService, stripe_subscription: Dict[str, Any]
) -> None:
    stripe_subscription_id = stripe_subscription["id"]
    subscription = await storage.get_subscription_by_stripe_id(stripe_subscription_id)
    if subscription is None:
        logger.warning(f"Update for unknown subscription {stripe_subscription_id}")
        return
    status = stripe_subscription.get("status")
    if status in CANCELED_STATUSES:
        await storage.cancel_subscription(subscription.id)
    elif status:
        changes: Dict[str, Any] = {"status": status}
        period_end = subscription_period_end(stripe_subscription)
        if period_end:
            changes["current_period_end"] = from_timestamp(period_end)
        await storage.subscriptions.update(subscription.id, changes)
    log_payment_event(f"subscription.{status}", stripe_subscription_id)


EVENT_HANDLERS: Dict[str, EventHandler] = {
    "checkout.session.completed": handle_checkout_completed,
    "invoice.paid": handle_invoice_paid,
    "customer.subscription.updated": handle_subscription_changed,
    "customer.subscription.deleted": handle_subscription_changed,
}


async def handle_webhook_event(storage: Storage, payments: PaymentService, event: Dict[str, Any]) -> bool:
    """
    Dispatch a decoded webhook event.

    Returns:
        True when the event type has a handler, False when it was ignored.
    """
    event_type = event.get("type")
    handler = EVENT_HANDLERS.get(event_type)
    if handler is None:
        logger.info(f"Unhandled webhook event type: {event_type}")
        return False
    obj = (event.get("data") or {}).get("object") or {}
    logger.info(f"Processing webhook event {event_type}")
    await handler(storage, payments, obj)
    return True
