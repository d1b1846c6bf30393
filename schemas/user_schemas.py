from typing import Literal
from pydantic import BaseModel, EmailStr, field_validator
from utils.emails import normalize_email

Role = Literal["admin", "librarian", "user"]


class CreateUserRequest(BaseModel):
    email: EmailStr
    name: str | None = None
    photo: str | None = None

    @field_validator('email')
    @classmethod
    def normalize(cls, value):
        return normalize_email(value)


class UpdateRoleRequest(BaseModel):
    role: Role
