import uuid
from sqlalchemy.sql import func
from sqlalchemy import Column, DateTime, String


def new_id() -> str:
    return uuid.uuid4().hex


class UUIDPrimaryKeyMixin:
    id = Column(String(32), primary_key=True, default=new_id)


class CreatedAtMixin:
    created_at = Column(DateTime(timezone=True), default=func.now())
