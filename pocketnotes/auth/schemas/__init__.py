"""Authentication Pydantic schemas for API validation."""

from .account import (
    AccountBase,
    AccountCreate,
    AccountLogin,
    AccountResponse,
    AuthResponse,
    TokenPayload,
)

__all__ = [
    "AccountBase",
    "AccountCreate",
    "AccountLogin",
    "AccountResponse",
    "AuthResponse",
    "TokenPayload",
]
