"""
Donation and Subscription Payment Endpoints.

Creates Stripe Checkout Sessions and Payment Intents, receives Stripe
webhooks and lets the success pages verify a finished checkout.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, Header, Request

from ecodata.core.logging_config import get_logger
from ecodata.core.models.io.payments import (
    CheckoutRequest,
    CheckoutSession,
    CheckoutVerification,
    PaymentIntentRequest,
    PaymentIntentResponse,
    SubscriptionCheckoutRequest,
    WebhookAck,
)
from ecodata.server.core.config import settings
from ecodata.server.services.webhooks import handle_webhook_event

from .deps import PaymentServiceDep, StorageDep

logger = get_logger(__name__)

router = APIRouter()

_PAYMENT_ERRORS = {
    400: {"description": "Invalid amount or interval"},
    503: {"description": "Stripe is not configured"},
}


def _origin(origin: Optional[str]) -> str:
    return (origin or settings.frontend_url).rstrip("/")


@router.post(
    "/create-checkout-session",
    response_model=CheckoutSession,
    summary="Create Donation Checkout Session",
    description="Start a one-off donation of £1 to £500 through Stripe Checkout.",
    responses=_PAYMENT_ERRORS,
)
async def create_checkout_session(
    body: CheckoutRequest,
    payments: PaymentServiceDep,
    origin: Annotated[Optional[str], Header()] = None,
):
    return await payments.create_checkout_session(body, _origin(origin))


@router.post(
    "/create-payment-intent",
    response_model=PaymentIntentResponse,
    summary="Create Payment Intent",
    description="Create a Payment Intent for an embedded card form (£1 to £10,000).",
    responses=_PAYMENT_ERRORS,
)
async def create_payment_intent(body: PaymentIntentRequest, payments: PaymentServiceDep):
    return await payments.create_payment_intent(body)


@router.post(
    "/create-subscription",
    response_model=CheckoutSession,
    summary="Create Recurring Donation",
    description="Start a monthly or yearly donation through Stripe Checkout.",
    responses=_PAYMENT_ERRORS,
)
async def create_subscription(
    body: SubscriptionCheckoutRequest,
    payments: PaymentServiceDep,
    origin: Annotated[Optional[str], Header()] = None,
):
    return await payments.create_subscription_session(body, _origin(origin))


@router.post(
    "/webhook",
    response_model=WebhookAck,
    summary="Stripe Webhook",
    description="Receives Stripe events. The signature is verified when STRIPE_WEBHOOK_SECRET is set.",
    responses={400: {"description": "Invalid signature or payload"}},
)
async def stripe_webhook(
    request: Request,
    storage: StorageDep,
    payments: PaymentServiceDep,
    stripe_signature: Annotated[Optional[str], Header()] = None,
):
    payload = await request.body()
    event = payments.parse_webhook_event(payload, stripe_signature)
    await handle_webhook_event(storage, payments, event)
    return WebhookAck()


@router.get(
    "/donations/verify/{session_id}",
    response_model=CheckoutVerification,
    summary="Verify Donation",
    responses={503: {"description": "Stripe is not configured"}},
)
async def verify_donation(session_id: str, payments: PaymentServiceDep):
    return await payments.summarize_checkout(session_id)


@router.get(
    "/subscriptions/verify/{session_id}",
    response_model=CheckoutVerification,
    summary="Verify Subscription",
    responses={503: {"description": "Stripe is not configured"}},
)
async def verify_subscription(session_id: str, payments: PaymentServiceDep):
    return await payments.summarize_checkout(session_id)
