"""User table operations.

IMPORT CONVENTION:
- Core accesses these through core.user property
- NO direct import needed when using Core API

Users are created once and never mutated or deleted here. Username
uniqueness is enforced by the UNIQUE constraint, so insert_unique() is
safe against concurrent registrations of the same name.
"""

import sqlite3

from ..exceptions import ConflictError
from ..utils import isodatetime


class UserOperations:
    """User persistence: lookup and insert-if-absent."""

    def __init__(self, conn: sqlite3.Connection, autocommit: bool = True):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
            autocommit: Commit after each write (False inside atomic Core)
        """
        self._conn = conn
        self._autocommit = autocommit

    def find_by_username(self, username: str) -> sqlite3.Row | None:
        """Get a user row by exact (case-sensitive) username, or None."""
        return self._conn.execute(
            "SELECT id, username, password_hash, created_at FROM users WHERE username = ?",
            (username,)
        ).fetchone()

    def get_by_id(self, user_id: int) -> sqlite3.Row | None:
        """Get a user row by ID, or None."""
        return self._conn.execute(
            "SELECT id, username, password_hash, created_at FROM users WHERE id = ?",
            (user_id,)
        ).fetchone()

    def insert_unique(self, username: str, password_hash: str) -> int:
        """Insert a user unless the username already exists.

        Args:
            username: Case-sensitive, non-empty username
            password_hash: Bcrypt hash, never the plaintext

        Returns:
            The server-assigned user ID

        Raises:
            ConflictError: If the username is already taken
        """
        try:
            cursor = self._conn.execute(
                """INSERT INTO users (username, password_hash, created_at)
                   VALUES (?, ?, ?)""",
                (username, password_hash, isodatetime.now())
            )
        except sqlite3.IntegrityError:
            raise ConflictError("Username taken", {"username": username})

        if self._autocommit:
            self._conn.commit()
        return cursor.lastrowid

    def list_all(self) -> list[sqlite3.Row]:
        """List all users ordered by ID (public columns only)."""
        return self._conn.execute(
            "SELECT id, username FROM users ORDER BY id"
        ).fetchall()
