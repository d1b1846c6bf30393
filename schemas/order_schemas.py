from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from models.orders import OrderStatus
from utils.emails import normalize_email


class CreateOrderRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    book_id: str = Field(alias="bookId")
    book_title: str | None = Field(default=None, alias="bookTitle")
    email: EmailStr
    author: str | None = None
    price: float

    @field_validator('book_id')
    @classmethod
    def validate_book_id(cls, value):
        if not value or not value.strip():
            raise ValueError('bookId cannot be empty')
        return value.strip()

    @field_validator('email')
    @classmethod
    def normalize(cls, value):
        return normalize_email(value)


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatus
