from core.database import Base
from sqlalchemy import Column, String, Numeric, Text
from .mixins import UUIDPrimaryKeyMixin, CreatedAtMixin


class Book(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "books"

    title = Column(String, nullable=False)
    # librarian email; copied onto orders for librarian-scoped listings
    author = Column(String, index=True)
    image = Column(String)
    description = Column(Text)
    price = Column(Numeric(10, 2), nullable=False)
