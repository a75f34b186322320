"""Account, login and token schemas.

password_hash never appears on any response schema.
"""

import re

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class AccountBase(BaseModel):
    """Fields shared by account input and output."""

    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., max_length=254)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails compare case-insensitively, so store them lowercased."""
        v = v.strip().lower()
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email address")
        return v


class AccountCreate(AccountBase):
    """Registration request."""

    password: str = Field(..., min_length=6, max_length=128)


class AccountLogin(BaseModel):
    """Login request. No format checks beyond presence."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AccountResponse(BaseModel):
    """Account as returned to clients. Extra row columns are dropped."""

    id: str
    name: str
    email: str


class AuthResponse(AccountResponse):
    """Register/login response: account fields plus a bearer token."""

    token: str


class TokenPayload(BaseModel):
    """Decoded JWT claims."""

    sub: str
    iat: int
    exp: int
