"""Account record operations.

IMPORT CONVENTION:
- Core accesses these through core.account property
- The credential store is the only caller that reads password_hash

Emails are stored lowercased; every lookup lowercases its argument, so
identity is case-insensitive without COLLATE tricks.
"""

import sqlite3

from ..utils import isodatetime, uid


def normalize_email(email: str) -> str:
    """Canonical form used for storage and comparison."""
    return email.strip().lower()


class AccountOperations:
    """Account operations."""

    def __init__(self, conn: sqlite3.Connection, autocommit: bool = True):
        """Initialize account operations.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
            autocommit: Commit after each write (False inside atomic Core)
        """
        self._conn = conn
        self._autocommit = autocommit

    def create(self, name: str, email: str, password_hash: str) -> sqlite3.Row:
        """Insert an account with an auto-generated UUID.

        Returns:
            The inserted row (without password_hash)

        Raises:
            sqlite3.IntegrityError: If the email is already registered
        """
        account_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO accounts (id, name, email, password_hash, created_at)
               VALUES (?, ?, ?, ?, ?)""",
            (account_id, name, normalize_email(email), password_hash, now)
        )
        if self._autocommit:
            self._conn.commit()

        return self.get_by_id(account_id)

    def get_by_id(self, account_id: str) -> sqlite3.Row | None:
        """Get account by ID, or None."""
        return self._conn.execute(
            "SELECT id, name, email, created_at FROM accounts WHERE id = ?",
            (account_id,)
        ).fetchone()

    def get_by_email(self, email: str) -> sqlite3.Row | None:
        """Get account by email (case-insensitive), or None."""
        return self._conn.execute(
            "SELECT id, name, email, created_at FROM accounts WHERE email = ?",
            (normalize_email(email),)
        ).fetchone()

    def get_with_password(self, email: str) -> sqlite3.Row | None:
        """Get account row including password_hash, or None."""
        return self._conn.execute(
            "SELECT id, name, email, created_at, password_hash FROM accounts WHERE email = ?",
            (normalize_email(email),)
        ).fetchone()
