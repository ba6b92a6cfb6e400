"""Identity Schemas — registration, login and the public user shape.

Invariants:
    - Emails are stripped and lower-cased before lookup or storage
    - Passwords fit bcrypt's 72-byte input limit
    - LoginRequest applies no password rules: a rule failure would reveal which
      accounts exist
"""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
BCRYPT_MAX_BYTES = 72


def _normalize_email(v: str) -> str:
    return v.strip().lower()


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    email: str = Field(max_length=320)
    password: str = Field(min_length=8)

    @field_validator("username")
    @classmethod
    def strip_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("username cannot be empty or whitespace")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        v = _normalize_email(v)
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("email is not a valid address")
        return v

    @field_validator("password")
    @classmethod
    def check_password_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"password cannot exceed {BCRYPT_MAX_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return _normalize_email(v)


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str
    created_at: datetime
