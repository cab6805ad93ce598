"""Session table operations.

IMPORT CONVENTION:
- Core accesses these through core.session property
- gatehouse.auth.sessions.SqliteSessionStore is the only caller

Expiry is compared as ISO 8601 text; see utils.isodatetime.to_timestamp.
"""

import sqlite3
from datetime import datetime

from ..utils import isodatetime


class SessionOperations:
    """Server-side session records keyed by opaque token."""

    def __init__(self, conn: sqlite3.Connection, autocommit: bool = True):
        self._conn = conn
        self._autocommit = autocommit

    def _commit(self) -> None:
        if self._autocommit:
            self._conn.commit()

    def create(self, token: str, user_id: int, username: str, expires_at: datetime) -> None:
        """Insert a session row.

        Raises:
            sqlite3.IntegrityError: If the token already exists
        """
        self._conn.execute(
            """INSERT INTO sessions (token, user_id, username, created_at, expires_at)
               VALUES (?, ?, ?, ?, ?)""",
            (token, user_id, username, isodatetime.now(), isodatetime.to_timestamp(expires_at))
        )
        self._commit()

    def get(self, token: str) -> sqlite3.Row | None:
        """Get an unexpired session row by token, or None."""
        return self._conn.execute(
            """SELECT token, user_id, username, created_at, expires_at
               FROM sessions WHERE token = ? AND expires_at > ?""",
            (token, isodatetime.now())
        ).fetchone()

    def delete(self, token: str) -> bool:
        """Delete a session by token.

        Returns:
            True if an unexpired session was removed, False otherwise
        """
        now = isodatetime.now()
        cursor = self._conn.execute(
            "DELETE FROM sessions WHERE token = ? AND expires_at > ?",
            (token, now)
        )
        # Expired rows for this token are dropped too but don't count
        self._conn.execute("DELETE FROM sessions WHERE token = ?", (token,))
        self._commit()
        return cursor.rowcount > 0

    def purge_expired(self) -> int:
        """Delete all expired sessions and return how many were removed."""
        cursor = self._conn.execute(
            "DELETE FROM sessions WHERE expires_at <= ?",
            (isodatetime.now(),)
        )
        self._commit()
        return cursor.rowcount
