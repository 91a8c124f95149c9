import re
from datetime import datetime, timezone
from typing import List

from pydantic import BaseModel, field_serializer, field_validator

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class SignupCreate(BaseModel):
    """Signup submission after sanitization.

    Names are trimmed and silently truncated; the email is trimmed,
    lower-cased and then checked against a basic local@domain.tld shape.
    """

    first_name: str
    last_name: str
    email: str

    @field_validator("first_name", "last_name")
    @classmethod
    def sanitize_name(cls, value: str) -> str:
        return value.strip()[:NAME_MAX_LENGTH]

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        value = value.strip().lower()
        if len(value) > EMAIL_MAX_LENGTH or not EMAIL_PATTERN.fullmatch(value):
            raise ValueError("Invalid email address")
        return value


class SignupOut(BaseModel):
    id: int
    first_name: str
    last_name: str
    email: str
    created_at: datetime

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> datetime:
        # SQLite returns naive values; they are stored as UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    class Config:
        from_attributes = True


class SignupListResponse(BaseModel):
    signups: List[SignupOut]


class SignupSuccess(BaseModel):
    success: bool = True
    message: str = "Successfully subscribed!"
