"""Server-side sessions.

A session maps an opaque token (delivered to the client in a cookie) to a
snapshot of the authenticated user's public data. The store is an explicit
collaborator behind the SessionStore protocol; create_app() picks one and
registers a SessionManager on the Flask app:

    manager = get_session_manager()
    token = manager.create_session(user)
    user = manager.require_session(token)   # AuthenticationError if absent
    manager.destroy_session(token)          # False if there was nothing to destroy

Store implementations translate their own failures into SessionStoreError.
"""

import logging
import sqlite3
import threading
from datetime import datetime
from typing import Protocol

from flask import current_app

from ..db import get_core
from ..exceptions import AuthenticationError, SessionStoreError
from ..utils import isodatetime, secret
from .schemas import SessionUser, UserResponse

logger = logging.getLogger(__name__)

EXTENSION_KEY = "gatehouse.sessions"

NOT_AUTHENTICATED = "You shall not pass!"


class SessionStore(Protocol):
    """Session persistence keyed by token."""

    def create(self, token: str, user: SessionUser, expires_at: datetime) -> None: ...

    def get(self, token: str) -> SessionUser | None: ...

    def destroy(self, token: str) -> bool: ...

    def purge_expired(self) -> int: ...


# ============================================================================
# SQLite Store
# ============================================================================


class SqliteSessionStore:
    """Sessions in the sessions table, one connection per operation."""

    def create(self, token: str, user: SessionUser, expires_at: datetime) -> None:
        try:
            with get_core(atomic=True) as core:
                core.session.create(token, user.id, user.username, expires_at)
        except sqlite3.Error as e:
            raise SessionStoreError("Server error", {"operation": "create"}) from e

    def get(self, token: str) -> SessionUser | None:
        try:
            core = get_core()
            try:
                row = core.session.get(token)
            finally:
                core.close()
        except sqlite3.Error as e:
            raise SessionStoreError("Server error", {"operation": "get"}) from e

        if row is None:
            return None
        return SessionUser(id=row["user_id"], username=row["username"])

    def destroy(self, token: str) -> bool:
        try:
            with get_core(atomic=True) as core:
                return core.session.delete(token)
        except sqlite3.Error as e:
            raise SessionStoreError("Server error", {"operation": "destroy"}) from e

    def purge_expired(self) -> int:
        try:
            with get_core(atomic=True) as core:
                return core.session.purge_expired()
        except sqlite3.Error as e:
            raise SessionStoreError("Server error", {"operation": "purge"}) from e


# ============================================================================
# In-Memory Store
# ============================================================================


class MemorySessionStore:
    """Process-local sessions. Lost on restart; not shared between workers."""

    def __init__(self):
        self._sessions: dict[str, tuple[SessionUser, datetime]] = {}
        self._lock = threading.Lock()

    def create(self, token: str, user: SessionUser, expires_at: datetime) -> None:
        with self._lock:
            if token in self._sessions:
                raise SessionStoreError("Server error", {"operation": "create"})
            self._sessions[token] = (user, expires_at)

    def get(self, token: str) -> SessionUser | None:
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            user, expires_at = entry
            if expires_at <= isodatetime.utcnow():
                del self._sessions[token]
                return None
            return user

    def destroy(self, token: str) -> bool:
        with self._lock:
            entry = self._sessions.pop(token, None)
        return entry is not None and entry[1] > isodatetime.utcnow()

    def purge_expired(self) -> int:
        now = isodatetime.utcnow()
        with self._lock:
            expired = [token for token, (_, expires_at) in self._sessions.items() if expires_at <= now]
            for token in expired:
                del self._sessions[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


# ============================================================================
# Session Manager
# ============================================================================


class SessionManager:
    """Session lifecycle: Anonymous -> Authenticated -> Anonymous."""

    def __init__(self, store: SessionStore, max_age_seconds: int):
        self.store = store
        self.max_age_seconds = max_age_seconds

    def create_session(self, user: UserResponse) -> str:
        """
        Start a session for a verified user.

        Only the public snapshot (id, username) is stored. Expired
        sessions are purged from the store on every login.

        Returns:
            The new session token

        Raises:
            SessionStoreError: If the store cannot persist the session
        """
        purged = self.store.purge_expired()
        if purged:
            logger.debug(f"Purged {purged} expired sessions")

        token = secret.generate_session_token()
        snapshot = SessionUser(id=user.id, username=user.username)
        self.store.create(token, snapshot, isodatetime.after_seconds(self.max_age_seconds))
        logger.debug(f"Session created for user {user.username}")
        return token

    def require_session(self, token: str | None) -> SessionUser:
        """
        Resolve the authenticated user for a token.

        Raises:
            AuthenticationError: If there is no token or no live session for it
            SessionStoreError: If the store cannot be read
        """
        if not token:
            raise AuthenticationError(NOT_AUTHENTICATED)

        user = self.store.get(token)
        if user is None:
            raise AuthenticationError(NOT_AUTHENTICATED)
        return user

    def destroy_session(self, token: str | None) -> bool:
        """
        Invalidate a session server-side.

        Returns:
            True if a session was destroyed, False if there was none (no-op)

        Raises:
            SessionStoreError: If the store fails while destroying
        """
        if not token:
            return False
        return self.store.destroy(token)


def build_session_store(backend: str) -> SessionStore:
    """Create the store named by settings.session_backend."""
    if backend == "memory":
        return MemorySessionStore()
    if backend == "sqlite":
        return SqliteSessionStore()
    raise ValueError(f"Unknown session backend: {backend}")


def get_session_manager() -> SessionManager:
    """Return the SessionManager registered on the current Flask app."""
    return current_app.extensions[EXTENSION_KEY]
