from models.users import User
from models.books import Book
from models.orders import Order, OrderStatus

__all__ = ["User", "Book", "Order", "OrderStatus"]
