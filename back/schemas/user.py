
import re
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from database.models import User

from .common import CamelSchema

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_PATTERN.match(value):
        raise ValueError("Provide a valid email")
    return value


class UserSchema(CamelSchema):
    id: UUID
    email: str
    name: str | None = None

    @classmethod
    def from_db(cls, user: User) -> "UserSchema":
        return cls(id=user.id, email=user.email, name=user.name)


class CredsSchema(BaseModel):
    email: str
    password: str = Field(min_length=8)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return normalize_email(value)


class RegisterSchema(BaseModel):
    email: str
    password: str = Field(min_length=8)
    name: str | None = Field(default=None, min_length=2, max_length=120)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return normalize_email(value)


class AuthSchema(CamelSchema):
    token: str
    user: UserSchema


class GoogleSignInSchema(CamelSchema):
    id_token: str = Field(min_length=20)
