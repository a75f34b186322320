"""Credential store: password hashing and verification.

Uses bcrypt, which salts each hash and compares in constant time. The work
factor comes from AuthConfig.hash_cost. Plaintext passwords are never
stored or logged.
"""

import logging
import sqlite3

import bcrypt

from ..config import AuthConfig
from ..db import Core
from ..exceptions import DuplicateAccount, InvalidCredentials
from .schemas import AccountResponse

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with a fresh random salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash.

    A malformed stored hash never verifies.
    """
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class CredentialStore:
    """Registers accounts and verifies email/password pairs.

    Holds no mutable state; one instance is shared by every request.
    """

    def __init__(self, config: AuthConfig):
        self._rounds = config.hash_cost
        # Compared against when the email is unknown so both failure paths
        # cost one bcrypt check.
        self._dummy_hash = hash_password("pocketnotes-timing-equalizer", self._rounds)

    def hash(self, password: str) -> str:
        return hash_password(password, self._rounds)

    def register(self, core: Core, name: str, email: str, password: str) -> AccountResponse:
        """Create an account.

        The hash is computed before touching the database so no write lock
        is held while bcrypt runs.

        Raises:
            DuplicateAccount: If the email (case-insensitive) is taken
        """
        if core.account.get_by_email(email) is not None:
            raise DuplicateAccount("User already exists")

        password_hash = self.hash(password)

        try:
            row = core.account.create(name, email, password_hash)
        except sqlite3.IntegrityError:
            # Lost a race with a concurrent registration for the same email
            raise DuplicateAccount("User already exists")

        logger.info(f"Account registered: {row['id']}")
        return AccountResponse.model_validate(dict(row))

    def verify(self, core: Core, email: str, password: str) -> AccountResponse:
        """Return the account whose credentials match.

        Raises:
            InvalidCredentials: Unknown email or wrong password (same message)
        """
        row = core.account.get_with_password(email)

        if row is None:
            verify_password(password, self._dummy_hash)
            raise InvalidCredentials(INVALID_CREDENTIALS_MESSAGE)

        if not verify_password(password, row["password_hash"]):
            raise InvalidCredentials(INVALID_CREDENTIALS_MESSAGE)

        return AccountResponse.model_validate(dict(row))
