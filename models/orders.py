import enum
from core.database import Base
from sqlalchemy import Column, String, Numeric, Enum, DateTime, UniqueConstraint
from sqlalchemy.sql import func
from .mixins import UUIDPrimaryKeyMixin


class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


PAYMENT_PAID = "paid"


class Order(Base, UUIDPrimaryKeyMixin):
    """
    A buyer's claim on one book.

    book_id is deliberately not a foreign key: orders outlive deleted books.
    At most one order exists per (book_id, email).
    """
    __tablename__ = "orders"
    __table_args__ = (
        UniqueConstraint("book_id", "email", name="uq_orders_book_buyer"),
    )

    book_id = Column(String, nullable=False, index=True)
    book_title = Column(String)
    email = Column(String, nullable=False, index=True)
    author = Column(String, index=True)
    price = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(*[s.value for s in OrderStatus], name="order_status"),
        default=OrderStatus.PENDING.value,
        nullable=False
    )

    # None until the payment provider confirms the checkout session
    payment_status = Column(String, nullable=True)
    transaction_id = Column(String, nullable=True)

    date = Column(DateTime(timezone=True), default=func.now())
    payment_date = Column(DateTime(timezone=True), nullable=True)
