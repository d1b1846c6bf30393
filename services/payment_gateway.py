"""
Payment service adapter.

The rest of the application only needs two operations from the payment
provider: open a checkout session carrying our correlation metadata, and
read back whether a session was paid (together with that same metadata).
"""

from dataclasses import dataclass, field
from typing import Protocol

import stripe

from core.exceptions import UpstreamFailure
from utils.logger import get_logger, sanitize_log_data

logger = get_logger(__name__)


@dataclass
class PaymentOutcome:
    paid: bool
    metadata: dict = field(default_factory=dict)
    transaction_id: str | None = None


class PaymentGateway(Protocol):
    def create_session(self, amount_cents: int, metadata: dict, description: str) -> str: ...

    def retrieve_session(self, session_id: str) -> PaymentOutcome: ...


class StripePaymentGateway:
    """
    Stripe Checkout implementation of PaymentGateway.

    A session id Stripe does not know is reported as not paid; every other
    Stripe error is surfaced as UpstreamFailure. Nothing is retried.
    """

    def __init__(self, api_key: str, currency: str, success_url: str, cancel_url: str):
        self.api_key = api_key
        self.currency = currency
        self.success_url = success_url
        self.cancel_url = cancel_url

    def create_session(self, amount_cents: int, metadata: dict, description: str) -> str:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                line_items=[{
                    "price_data": {
                        "currency": self.currency,
                        "unit_amount": amount_cents,
                        "product_data": {"name": description},
                    },
                    "quantity": 1,
                }],
                metadata=metadata,
                customer_email=metadata.get("buyerEmail"),
                success_url=self.success_url,
                cancel_url=self.cancel_url,
            )
        except stripe.StripeError as e:
            logger.error(
                f"Checkout session creation failed: {str(e)}",
                extra={"metadata": sanitize_log_data(metadata), "error_type": type(e).__name__},
                exc_info=True
            )
            raise UpstreamFailure("Payment service unavailable") from e

        return session.url

    def retrieve_session(self, session_id: str) -> PaymentOutcome:
        try:
            session = stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)
        except stripe.InvalidRequestError as e:
            # Unknown or malformed session id: nothing was paid through it
            logger.warning(
                "Checkout session not found",
                extra=sanitize_log_data({"session_id": session_id, "error": str(e)})
            )
            return PaymentOutcome(paid=False)
        except stripe.StripeError as e:
            logger.error(
                f"Checkout session lookup failed: {str(e)}",
                extra=sanitize_log_data({"session_id": session_id, "error_type": type(e).__name__}),
                exc_info=True
            )
            raise UpstreamFailure("Payment service unavailable") from e

        return PaymentOutcome(
            paid=session.payment_status == "paid",
            metadata=dict(session.metadata or {}),
            transaction_id=session.payment_intent,
        )
