from pydantic import BaseModel, field_validator


class CreateBookRequest(BaseModel):
    title: str
    author: str | None = None
    image: str | None = None
    description: str | None = None
    price: float

    @field_validator('title')
    @classmethod
    def validate_title(cls, value):
        if not value or not value.strip():
            raise ValueError('Title cannot be empty')
        return value
