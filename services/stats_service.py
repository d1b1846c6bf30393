from sqlalchemy import func
from sqlalchemy.orm import Session
from models.books import Book
from models.orders import Order, OrderStatus, PAYMENT_PAID
from models.users import User


class StatsService:

    @staticmethod
    def summary(db: Session) -> dict:
        """
        Dashboard counters.

        Every user has exactly one role and every order exactly one status,
        so the per-role and per-status counts always add up to the totals.
        """
        role_counts = dict(db.query(User.role, func.count(User.id)).group_by(User.role).all())
        status_counts = dict(db.query(Order.status, func.count(Order.id)).group_by(Order.status).all())

        return {
            "totalUsers": db.query(func.count(User.id)).scalar(),
            "admins": role_counts.get("admin", 0),
            "librarians": role_counts.get("librarian", 0),
            "users": role_counts.get("user", 0),
            "totalBooks": db.query(func.count(Book.id)).scalar(),
            "totalOrders": db.query(func.count(Order.id)).scalar(),
            "pendingOrders": status_counts.get(OrderStatus.PENDING.value, 0),
            "cancelledOrders": status_counts.get(OrderStatus.CANCELLED.value, 0),
            "completedOrders": status_counts.get(OrderStatus.COMPLETED.value, 0),
            "paidOrders": db.query(func.count(Order.id)).filter(Order.payment_status == PAYMENT_PAID).scalar(),
        }
