"""Note record operations.

IMPORT CONVENTION:
- Core accesses these through core.note property

These operations do not authorize anything. Handlers must pass the
ownership guard (auth/guard.py) before calling update() or delete();
list_by_owner() is owner-scoped by its WHERE clause.
"""

import sqlite3
from typing import Any

from . import query
from ..utils import isodatetime, uid

# Columns a partial update may never touch
IMMUTABLE_COLUMNS = {"id", "owner_id", "created_at", "updated_at"}

SEARCH_FRAGMENT = (
    "(LOWER(title) LIKE ? ESCAPE '\\' OR LOWER(content) LIKE ? ESCAPE '\\')"
)


def _like_pattern(term: str) -> str:
    """Substring LIKE pattern with %, _ and the escape char taken literally."""
    escaped = (
        term.lower()
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


class NoteOperations:
    """Note operations."""

    def __init__(self, conn: sqlite3.Connection, autocommit: bool = True):
        """Initialize note operations.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
            autocommit: Commit after each write (False inside atomic Core)
        """
        self._conn = conn
        self._autocommit = autocommit

    def _commit(self) -> None:
        if self._autocommit:
            self._conn.commit()

    def get_by_id(self, note_id: str) -> sqlite3.Row | None:
        """Get note by ID, or None if it does not exist."""
        return self._conn.execute(
            "SELECT * FROM notes WHERE id = ?",
            (note_id,)
        ).fetchone()

    def list_by_owner(
        self,
        owner_id: str,
        is_favorite: bool | None = None,
        search: str | None = None
    ) -> list[sqlite3.Row]:
        """List an owner's notes, newest first.

        Args:
            owner_id: Account ID whose notes to return
            is_favorite: If set, only notes with this favorite flag
            search: If non-empty, only notes whose title or content contains
                it (case-insensitive)
        """
        conditions = {
            "owner_id": owner_id,
            "is_favorite": None if is_favorite is None else int(is_favorite),
            "search": _like_pattern(search) if search else None,
        }
        where_clause, params = query.build_where_clause(
            conditions,
            param_map={"search": SEARCH_FRAGMENT}
        )

        return self._conn.execute(
            f"""SELECT * FROM notes
                WHERE {where_clause}
                ORDER BY created_at DESC, rowid DESC""",
            params
        ).fetchall()

    def create(
        self,
        owner_id: str,
        title: str,
        content: str,
        is_favorite: bool = False
    ) -> str:
        """Insert a note owned by owner_id.

        Returns:
            The auto-generated note ID (UUID v4 string)
        """
        note_id = uid.generate_uuid()
        now = isodatetime.now()

        self._conn.execute(
            """INSERT INTO notes
               (id, owner_id, title, content, is_favorite, created_at, updated_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (note_id, owner_id, title, content, int(is_favorite), now, now)
        )
        self._commit()

        return note_id

    def update(self, note_id: str, data: dict[str, Any]) -> int:
        """Update note with partial data.

        Returns:
            Number of rows changed (0 when nothing to update or the note
            no longer exists)

        Note:
            - None values are skipped
            - id, owner_id and timestamps are never taken from data
            - updated_at is refreshed whenever something changes
        """
        if "is_favorite" in data and data["is_favorite"] is not None:
            data = {**data, "is_favorite": int(data["is_favorite"])}

        update_clause, params = query.build_update_clause(
            data,
            exclude=IMMUTABLE_COLUMNS
        )
        if not update_clause:
            return 0

        params.extend([isodatetime.now(), note_id])
        cursor = self._conn.execute(
            f"UPDATE notes SET {update_clause}, updated_at = ? WHERE id = ?",
            params
        )
        self._commit()
        return cursor.rowcount

    def delete(self, note_id: str) -> int:
        """Hard-delete a note. Returns the number of rows removed."""
        cursor = self._conn.execute("DELETE FROM notes WHERE id = ?", (note_id,))
        self._commit()
        return cursor.rowcount
