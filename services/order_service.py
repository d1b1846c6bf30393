from datetime import datetime, timezone
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from core.exceptions import NotFound, InvalidTransition
from core.policy import ensure_owner
from models.orders import Order, OrderStatus, PAYMENT_PAID
from schemas.order_schemas import CreateOrderRequest
from utils.logger import get_logger

logger = get_logger(__name__)

ALREADY_ORDERED = "You have already ordered this book"


def order_to_dict(order: Order) -> dict:
    return {
        "id": order.id,
        "bookId": order.book_id,
        "bookTitle": order.book_title,
        "email": order.email,
        "author": order.author,
        "price": float(order.price),
        "status": order.status,
        "payment_status": order.payment_status,
        "transactionId": order.transaction_id,
        "date": order.date,
        "paymentDate": order.payment_date,
    }


class OrderService:

    @staticmethod
    def get_order_or_404(db: Session, order_id: str) -> Order:
        order = db.query(Order).filter(Order.id == order_id).one_or_none()
        if not order:
            raise NotFound("Order not found")
        return order

    @staticmethod
    def create_order(body: CreateOrderRequest, user: dict, db: Session) -> dict:
        """
        Place an order for one book.

        A second order for the same (book, buyer) is not an error: the call
        reports insertedId None with an explanatory message. The unique
        constraint on (book_id, email) catches the case where two requests
        pass the existence check at the same time.
        """
        ensure_owner(user, body.email, allow_operator=False)

        existing = db.query(Order).filter(
            Order.book_id == body.book_id,
            Order.email == body.email
        ).first()
        if existing:
            logger.info(
                "Duplicate order suppressed",
                extra={"book_id": body.book_id, "email": body.email, "order_id": existing.id}
            )
            return {"message": ALREADY_ORDERED, "insertedId": None}

        order = Order(
            book_id=body.book_id,
            book_title=body.book_title,
            email=body.email,
            author=body.author,
            price=body.price,
            status=OrderStatus.PENDING.value,
            date=datetime.now(timezone.utc)
        )
        db.add(order)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning(
                "Concurrent duplicate order rejected by unique constraint",
                extra={"book_id": body.book_id, "email": body.email}
            )
            return {"message": ALREADY_ORDERED, "insertedId": None}

        logger.info(
            "Order created",
            extra={"order_id": order.id, "book_id": order.book_id, "email": order.email}
        )
        return {"acknowledged": True, "insertedId": order.id}

    @staticmethod
    def list_orders(db: Session, email: str | None = None) -> list[dict]:
        query = db.query(Order)
        if email:
            query = query.filter(Order.email == email)
        return [order_to_dict(o) for o in query.order_by(Order.price.desc()).all()]

    @staticmethod
    def list_orders_by_author(db: Session, author: str) -> list[dict]:
        orders = db.query(Order).filter(Order.author == author).order_by(Order.price.desc()).all()
        return [order_to_dict(o) for o in orders]

    @staticmethod
    def get_order(order_id: str, user: dict, db: Session) -> dict:
        order = OrderService.get_order_or_404(db, order_id)
        ensure_owner(user, order.email)
        return order_to_dict(order)

    @staticmethod
    def cancel_order(order_id: str, user: dict, db: Session) -> dict:
        """
        pending -> cancelled, by the buyer only.

        Existence is checked before ownership so a missing order is a 404 even
        for strangers. The transition itself is a single UPDATE guarded on the
        current status; if no row matched, the order was not pending.
        """
        order = OrderService.get_order_or_404(db, order_id)
        ensure_owner(user, order.email, allow_operator=False)

        updated = db.query(Order).filter(
            Order.id == order_id,
            Order.status == OrderStatus.PENDING.value
        ).update({Order.status: OrderStatus.CANCELLED.value}, synchronize_session=False)
        db.commit()

        if not updated:
            logger.warning(
                "Cancel rejected - order not pending",
                extra={"order_id": order_id, "status": order.status}
            )
            raise InvalidTransition(f"Only pending orders can be cancelled (current status: {order.status})")

        db.refresh(order)
        logger.info("Order cancelled", extra={"order_id": order_id, "email": order.email})
        return order_to_dict(order)

    @staticmethod
    def update_status(order_id: str, new_status: OrderStatus, db: Session) -> dict:
        # Operator overwrite: any source status is accepted.
        order = OrderService.get_order_or_404(db, order_id)
        previous = order.status
        order.status = new_status.value
        db.commit()
        db.refresh(order)

        logger.info(
            "Order status overwritten",
            extra={"order_id": order_id, "from_status": previous, "to_status": new_status.value}
        )
        return order_to_dict(order)

    @staticmethod
    def delete_order(order_id: str, db: Session) -> dict:
        deleted = db.query(Order).filter(Order.id == order_id).delete(synchronize_session=False)
        db.commit()
        if not deleted:
            raise NotFound("Order not found")

        logger.info("Order deleted", extra={"order_id": order_id})
        return {"deletedCount": deleted}

    @staticmethod
    def list_payments(db: Session, email: str | None = None) -> list[dict]:
        query = db.query(Order).filter(Order.payment_status == PAYMENT_PAID)
        if email:
            query = query.filter(Order.email == email)
        return [order_to_dict(o) for o in query.order_by(Order.payment_date.desc()).all()]
