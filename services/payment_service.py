from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from sqlalchemy.orm import Session
from core.exceptions import Forbidden, InvalidTransition
from core.policy import ensure_owner
from models.orders import Order, OrderStatus, PAYMENT_PAID
from schemas.payment_schemas import CheckoutSessionRequest
from services.order_service import OrderService
from services.payment_gateway import PaymentGateway
from utils.emails import normalize_email
from utils.logger import get_logger, sanitize_log_data

logger = get_logger(__name__)


def to_minor_units(price) -> int:
    return int((Decimal(str(price)) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class PaymentService:
    """
    Two-phase checkout.

    Phase one opens a checkout session whose metadata is {orderId, buyerEmail}
    and hands the redirect URL back to the buyer; nothing is written locally.
    Phase two reads the session back and, if it was paid, marks the order.
    Abandoned checkouts simply leave the order pending and unpaid.
    """

    @staticmethod
    def create_checkout_session(body: CheckoutSessionRequest, user: dict, db: Session,
                                gateway: PaymentGateway) -> dict:
        order = OrderService.get_order_or_404(db, body.order_id)
        ensure_owner(user, order.email, allow_operator=False)

        if order.status != OrderStatus.PENDING.value:
            raise InvalidTransition(f"Only pending orders can be paid (current status: {order.status})")
        if order.payment_status == PAYMENT_PAID:
            raise InvalidTransition("Order is already paid")

        metadata = {"orderId": order.id, "buyerEmail": order.email}
        url = gateway.create_session(
            amount_cents=to_minor_units(order.price),
            metadata=metadata,
            description=order.book_title or f"Order {order.id}"
        )

        logger.info("Checkout session created", extra=metadata)
        return {"url": url}

    @staticmethod
    def reconcile(session_id: str, user: dict, db: Session, gateway: PaymentGateway) -> dict:
        """
        Apply the outcome of a checkout session to its order.

        Only payment_status, transactionId and paymentDate are written; the
        order status is left alone. Confirming an order that is already paid
        is answered from the stored record without touching it again.
        """
        outcome = gateway.retrieve_session(session_id)

        if not outcome.paid:
            logger.info(
                "Checkout session not paid",
                extra=sanitize_log_data({"session_id": session_id})
            )
            return {"success": False}

        order = OrderService.get_order_or_404(db, outcome.metadata.get("orderId"))

        # The session must have been opened for this order's buyer, and the
        # caller must be that buyer (or an operator).
        buyer = outcome.metadata.get("buyerEmail")
        if not buyer or normalize_email(buyer) != normalize_email(order.email):
            logger.warning(
                "Checkout session buyer does not match order",
                extra={"order_id": order.id, "buyer": buyer}
            )
            raise Forbidden("Payment session does not belong to this order")
        ensure_owner(user, buyer)

        paid_at = datetime.now(timezone.utc)
        updated = db.query(Order).filter(
            Order.id == order.id,
            Order.payment_status.is_(None)
        ).update({
            Order.payment_status: PAYMENT_PAID,
            Order.transaction_id: outcome.transaction_id,
            Order.payment_date: paid_at,
        }, synchronize_session=False)
        db.commit()

        if not updated:
            logger.info("Payment already recorded", extra={"order_id": order.id})
            return {
                "success": True,
                "orderId": order.id,
                "transactionId": order.transaction_id,
                "message": "Payment already recorded"
            }

        logger.info(
            "Payment reconciled",
            extra={"order_id": order.id, "transaction_id": outcome.transaction_id}
        )
        return {
            "success": True,
            "orderId": order.id,
            "transactionId": outcome.transaction_id,
            "paymentDate": paid_at
        }
