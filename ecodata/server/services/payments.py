"""
Stripe payment service.

Thin async wrapper around the synchronous ``stripe`` SDK: every call runs in
the thread pool with the configured secret key and Stripe failures are turned
into ``PaymentServiceError`` with the HTTP status the API should answer with.
Results are returned as plain dicts.
"""

import json
import math
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import stripe
from fastapi.concurrency import run_in_threadpool

from ecodata.core.exceptions import BadRequestError, PaymentServiceError
from ecodata.core.logging_config import get_logger
from ecodata.core.models.io.payments import (
    CheckoutRequest,
    GiftAidDeclaration,
    PaymentIntentRequest,
    SubscriptionCheckoutRequest,
)
from ecodata.core.monitoring import log_payment_event
from ecodata.server.core.config import StripeConfig, settings

logger = get_logger(__name__)

MIN_AMOUNT = 1
MAX_CHECKOUT_AMOUNT = 500
MAX_PAYMENT_INTENT_AMOUNT = 10000
SUBSCRIPTION_INTERVALS = ("month", "year")

# (exception type, HTTP status, message template); first match wins
_STRIPE_ERRORS = (
    (stripe.AuthenticationError, 503, "Payment service authentication error. Please contact support."),
    (stripe.InvalidRequestError, 400, "Invalid {kind} request. Please try again."),
    (stripe.APIConnectionError, 503, "Unable to connect to payment service. Please try again later."),
    (stripe.RateLimitError, 429, "Too many {kind} requests. Please try again in a few minutes."),
)


def to_pence(amount: float) -> int:
    return int(round(amount * 100))


def from_timestamp(value: Optional[int]) -> Optional[datetime]:
    """Convert a Stripe epoch timestamp to naive UTC."""
    if value is None:
        return None
    return datetime.fromtimestamp(value, tz=timezone.utc).replace(tzinfo=None)


def _to_dict(obj: Any) -> Dict[str, Any]:
    if obj is None:
        return {}
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


def _gift_aid_metadata(declaration: GiftAidDeclaration) -> Dict[str, str]:
    return {
        "isGiftAid": "true" if declaration.is_gift_aid else "false",
        "giftAidName": declaration.gift_aid_name or "",
        "giftAidAddress": declaration.gift_aid_address or "",
        "giftAidPostcode": declaration.gift_aid_postcode or "",
    }


def validate_amount(amount: float, maximum: int, kind: str = "donation") -> None:
    if math.isnan(amount) or amount < MIN_AMOUNT or amount > maximum:
        raise BadRequestError(f"Invalid {kind} amount. Please enter an amount between £{MIN_AMOUNT} and £{maximum:,}.")


class PaymentService:
    """Create Stripe checkout sessions, payment intents and subscriptions."""

    def __init__(self, config: Optional[StripeConfig] = None):
        self.config = config or settings.stripe

    @property
    def is_configured(self) -> bool:
        key = self.config.secret_key
        return bool(key) and not key.startswith("pk_")

    def ensure_configured(self, feature: str = "Donation") -> None:
        """Raise 503 when no secret key, or a publishable key, is configured."""
        key = self.config.secret_key
        if not key:
            logger.error("STRIPE_SECRET_KEY is not set")
            raise PaymentServiceError(
                f"{feature} functionality is currently unavailable. Please try again later.",
                status_code=503,
                code="not_configured",
            )
        if key.startswith("pk_"):
            logger.error("Publishable key used where secret key is required")
            raise PaymentServiceError(
                f"{feature} functionality is currently unavailable due to invalid configuration.",
                status_code=503,
                code="invalid_configuration",
            )

    async def _call(self, kind: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Dict[str, Any]:
        """Run a Stripe SDK call in the thread pool and map its failures."""
        try:
            result = await run_in_threadpool(func, *args, api_key=self.config.secret_key, **kwargs)
        except stripe.StripeError as e:
            status_code, message = 500, f"Failed to process {kind}. Please try again later."
            for error_type, error_status, template in _STRIPE_ERRORS:
                if isinstance(e, error_type):
                    status_code, message = error_status, template.format(kind=kind)
                    break
            logger.error(f"Stripe {type(e).__name__} while processing {kind}: {e}")
            raise PaymentServiceError(message, status_code=status_code, code=e.code or "unknown") from e
        return _to_dict(result)

    # =====================================================================
    # Checkout
    # =====================================================================

    async def create_checkout_session(self, request: CheckoutRequest, origin: str) -> Dict[str, Any]:
        """
        Create a one-off donation Checkout Session.

        Args:
            request: Donation amount (pounds), donor email and Gift Aid declaration
            origin: Website origin used for the success and cancel redirects

        Returns:
            ``{"url": ..., "session_id": ...}``
        """
        self.ensure_configured("Donation")
        validate_amount(request.amount, MAX_CHECKOUT_AMOUNT)
        amount_in_pence = to_pence(request.amount)
        logger.info(f"Creating checkout session for £{request.amount:.2f} ({amount_in_pence} pence)")

        metadata = {"donationAmount": f"{request.amount:.2f}", **_gift_aid_metadata(request), "email": request.email or ""}
        if request.funding_goal_id:
            metadata["goalId"] = request.funding_goal_id
        session = await self._call(
            "donation",
            stripe.checkout.Session.create,
            payment_method_types=["card"],
            line_items=[
                {
                    "price_data": {
                        "currency": "gbp",
                        "product_data": {
                            "name": "Donation to ECODATA CIC",
                            "description": "Supporting eco-friendly data initiatives",
                        },
                        "unit_amount": amount_in_pence,
                    },
                    "quantity": 1,
                }
            ],
            mode="payment",
            success_url=f"{origin}/donation-success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=origin,
            metadata=metadata,
            customer_email=request.email or None,
        )
        if not session.get("url"):
            raise PaymentServiceError("Stripe session created but no redirect URL was provided")
        log_payment_event("checkout.session.created", session["id"], request.amount)
        return {"url": session["url"], "session_id": session["id"]}

    async def create_payment_intent(self, request: PaymentIntentRequest) -> Dict[str, Any]:
        self.ensure_configured("Payment")
        validate_amount(request.amount, MAX_PAYMENT_INTENT_AMOUNT)
        goal = request.funding_goal_id
        intent = await self._call(
            "payment",
            stripe.PaymentIntent.create,
            amount=to_pence(request.amount),
            currency="gbp",
            metadata={
                **_gift_aid_metadata(request),
                "goalId": goal or "",
                "email": request.email or "",
                "name": request.name or "",
            },
            receipt_email=request.email or None,
            description=f"One-time donation to ECODATA CIC{f' - {goal}' if goal else ''}",
        )
        log_payment_event("payment_intent.created", intent["id"], request.amount)
        return {"client_secret": intent["client_secret"], "payment_intent_id": intent["id"]}

    async def create_subscription_session(self, request: SubscriptionCheckoutRequest, origin: str) -> Dict[str, Any]:
        """Create a product, a recurring price and a subscription-mode Checkout Session."""
        self.ensure_configured("Subscription")
        validate_amount(request.amount, MAX_CHECKOUT_AMOUNT, kind="subscription")
        if request.interval not in SUBSCRIPTION_INTERVALS:
            raise BadRequestError("Invalid subscription interval. Please select either monthly or yearly.")

        label = "Monthly" if request.interval == "month" else "Annual"
        product = await self._call(
            "subscription",
            stripe.Product.create,
            name=f"{label} Donation to ECODATA CIC",
            description=f"Supporting eco-friendly data initiatives ({request.interval}ly)",
        )
        price = await self._call(
            "subscription",
            stripe.Price.create,
            product=product["id"],
            unit_amount=to_pence(request.amount),
            currency="gbp",
            recurring={"interval": request.interval},
        )
        metadata = {
            "donationAmount": f"{request.amount:.2f}",
            "interval": request.interval,
            **_gift_aid_metadata(request),
            "email": request.email or "",
            "name": request.name or "",
            "tier": request.tier or "",
        }
        session = await self._call(
            "subscription",
            stripe.checkout.Session.create,
            payment_method_types=["card"],
            line_items=[{"price": price["id"], "quantity": 1}],
            mode="subscription",
            success_url=f"{origin}/subscription-success?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=origin,
            metadata=metadata,
            customer_email=request.email or None,
        )
        log_payment_event("subscription.session.created", session["id"], request.amount)
        return {"url": session["url"], "session_id": session["id"]}

    # =====================================================================
    # Retrieval and cancellation
    # =====================================================================

    async def retrieve_checkout_session(self, session_id: str) -> Dict[str, Any]:
        self.ensure_configured("Payment")
        return await self._call("payment", stripe.checkout.Session.retrieve, session_id)

    async def retrieve_subscription(self, subscription_id: str) -> Dict[str, Any]:
        self.ensure_configured("Subscription")
        return await self._call("subscription", stripe.Subscription.retrieve, subscription_id)

    async def cancel_subscription(self, subscription_id: str) -> Dict[str, Any]:
        self.ensure_configured("Subscription")
        result = await self._call("subscription", stripe.Subscription.cancel, subscription_id)
        log_payment_event("subscription.canceled", subscription_id)
        return result

    async def summarize_checkout(self, session_id: str) -> Dict[str, Any]:
        """Public summary of a finished Checkout Session, with subscription details when present."""
        session = await self.retrieve_checkout_session(session_id)
        customer = session.get("customer_details") or {}
        amount_total = session.get("amount_total")
        summary: Dict[str, Any] = {
            "status": session.get("status"),
            "payment_status": session.get("payment_status"),
            "amount": f"{amount_total / 100:.2f}" if amount_total else None,
            "currency": session.get("currency"),
            "customer_email": customer.get("email"),
            "customer_name": customer.get("name"),
            "mode": session.get("mode"),
            "subscription": None,
        }
        subscription_id = session.get("subscription")
        if subscription_id:
            subscription = await self.retrieve_subscription(subscription_id)
            summary["subscription"] = {
                "id": subscription["id"],
                "status": subscription.get("status"),
                "current_period_end": from_timestamp(subscription_period_end(subscription)),
                "interval": subscription_interval(subscription),
            }
        return summary

    # =====================================================================
    # Webhooks
    # =====================================================================

    def parse_webhook_event(self, payload: bytes, signature: Optional[str]) -> Dict[str, Any]:
        """
        Verify and decode a webhook payload.

        The signature is checked only when ``STRIPE_WEBHOOK_SECRET`` is set.

        Raises:
            BadRequestError: The signature or payload is invalid.
        """
        if self.config.webhook_secret:
            try:
                stripe.Webhook.construct_event(payload, signature or "", self.config.webhook_secret)
            except (stripe.SignatureVerificationError, ValueError) as e:
                logger.error(f"Webhook signature verification failed: {e}")
                raise BadRequestError(f"Webhook Error: {e}") from e
        else:
            logger.warning("No webhook secret configured, skipping signature verification")
        try:
            event = json.loads(payload)
        except ValueError as e:
            raise BadRequestError(f"Webhook Error: {e}") from e
        if not isinstance(event, dict):
            raise BadRequestError("Webhook Error: invalid payload")
        return event


def subscription_period_end(subscription: Dict[str, Any]) -> Optional[int]:
    """``current_period_end`` lives on the subscription or, in newer API versions, on its items."""
    if subscription.get("current_period_end"):
        return subscription["current_period_end"]
    items = (subscription.get("items") or {}).get("data") or []
    return items[0].get("current_period_end") if items else None


def subscription_interval(subscription: Dict[str, Any]) -> Optional[str]:
    items = (subscription.get("items") or {}).get("data") or []
    if not items:
        return None
    price = items[0].get("price") or items[0].get("plan") or {}
    return (price.get("recurring") or {}).get("interval") or price.get("interval")


# Singleton instance
payment_service = PaymentService()


def get_payment_service() -> PaymentService:
    return payment_service
