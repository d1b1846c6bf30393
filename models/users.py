from core.database import Base
from sqlalchemy import Column, String, Enum
from .mixins import UUIDPrimaryKeyMixin, CreatedAtMixin

USER_ROLES = ("admin", "librarian", "user")


class User(Base, UUIDPrimaryKeyMixin, CreatedAtMixin):
    __tablename__ = "users"

    email = Column(String, unique=True, nullable=False, index=True)
    name = Column(String)
    photo = Column(String)
    role = Column(Enum(*USER_ROLES, name="user_role"), default="user", nullable=False)
