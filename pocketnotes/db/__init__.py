"""Database module for PocketNotes.

This module provides the Core API for database operations.
Core encapsulates connection management and provides access to the
account and note operations.

ARCHITECTURE:
- Core owns its connection (no Flask g.db dependency)
- Connection closes on context exit (atomic=True) or when Core is collected
- Each record type gets an encapsulated operations class

The auth subsystem treats Core as its persistence collaborator: it only ever
calls find-by-id, find-by-owner, insert, update and delete through it.
"""

import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from flask import current_app, has_app_context

from ..config import settings

if TYPE_CHECKING:
    from .account import AccountOperations
    from .note import NoteOperations


SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


class Core:
    """
    Database Core with account and note operations.

    Connection Lifecycle:
    - atomic=True: Connection commits/rolls back and closes on __exit__
    - atomic=False: Each operation commits independently
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        """Initialize Core with a database connection.

        Args:
            connection: SQLite connection with row_factory set to sqlite3.Row
            atomic: If True, Core MUST be used as context manager.
                    If False, Core has autocommit semantics.
        """
        self._conn = connection
        self._atomic = atomic
        self._account_ops = None
        self._note_ops = None

    @property
    def account(self) -> "AccountOperations":
        """Account operations (lazy-loaded, cached)."""
        if self._account_ops is None:
            from .account import AccountOperations
            self._account_ops = AccountOperations(self._conn, autocommit=not self._atomic)
        return self._account_ops

    @property
    def note(self) -> "NoteOperations":
        """Note operations (lazy-loaded, cached)."""
        if self._note_ops is None:
            from .note import NoteOperations
            self._note_ops = NoteOperations(self._conn, autocommit=not self._atomic)
        return self._note_ops

    def close(self) -> None:
        """Close the underlying connection."""
        self._conn.close()

    def __enter__(self) -> "Core":
        """Enter context manager for atomic transaction.

        Raises:
            RuntimeError: If Core was not created with atomic=True
        """
        if not self._atomic:
            raise RuntimeError(
                "Core must be created with atomic=True for context manager use. "
                "Use: with db.get_core(atomic=True) as core:"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager, committing or rolling back transaction."""
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()

    def __del__(self):
        """Close the connection on garbage collection if still open."""
        conn = getattr(self, "_conn", None)
        if conn is not None:
            try:
                conn.close()
            except sqlite3.ProgrammingError:
                # Connection already closed from another thread
                pass


def resolve_database_path(database_path: str | None = None) -> str:
    """Pick the database path: explicit argument, then app config, then settings."""
    if database_path:
        return database_path
    if has_app_context():
        configured = current_app.config.get("DATABASE_PATH")
        if configured:
            return configured
    return settings.database_path


def _create_connection(database_path: str) -> sqlite3.Connection:
    """Create a fresh database connection.

    Returns:
        SQLite connection with row_factory set to sqlite3.Row
        and foreign keys enabled.
    """
    db_path = Path(database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def get_core(atomic: bool = False, database_path: str | None = None) -> Core:
    """
    Get a database Core instance.

    Args:
        atomic: If True, returns a Core that MUST be used as context manager.
                Use for multi-operation writes that need to commit together.
                If False (default), each write commits on its own.
        database_path: Override the configured database file.

    Examples:
        Autocommit mode:
        >>> core = get_core()
        >>> note = core.note.get_by_id(note_id)

        Atomic mode:
        >>> with get_core(atomic=True) as core:
        ...     core.note.update(note_id, {"title": "x"})
    """
    conn = _create_connection(resolve_database_path(database_path))
    return Core(conn, atomic=atomic)


# ============================================================================
# DATABASE INITIALIZATION
# ============================================================================

def init_db(database_path: str | None = None):
    """Initialize database by running schema.sql if not already initialized."""
    db_path = Path(resolve_database_path(database_path))
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='_schema_metadata'"
        )
        if cursor.fetchone():
            # Database already initialized, skip
            return

        schema_sql = SCHEMA_PATH.read_text()
        conn.executescript(schema_sql)
        conn.commit()
    finally:
        conn.close()
