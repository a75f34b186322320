"""Authentication module for PocketNotes.

This module provides authentication and authorization functionality:
- Schema validation for auth operations
- Password hashing and verification (credentials)
- JWT token issuance and verification (token)
- Authentication middleware for protected endpoints (middleware)
- Ownership checks for single-note operations (guard)

Auth endpoints (see api.py):
- POST /auth/register - Create account and return token
- POST /auth/login - Authenticate and return token
- POST /auth/logout - Stateless no-op
- GET /auth/me - Get current account info
"""

from dataclasses import dataclass

from ..config import AuthConfig
from . import schemas
from .credentials import CredentialStore
from .token import TokenIssuer


@dataclass(frozen=True)
class AuthServices:
    """Process-wide auth components, stored in app.extensions["pocketnotes"]."""

    token_issuer: TokenIssuer
    credential_store: CredentialStore

    @classmethod
    def from_config(cls, config: AuthConfig) -> "AuthServices":
        return cls(
            token_issuer=TokenIssuer(config),
            credential_store=CredentialStore(config),
        )


__all__ = ["AuthServices", "CredentialStore", "TokenIssuer", "schemas"]
