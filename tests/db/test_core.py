"""Tests for Core API database interface.

Behavior-focused tests using a real temp-file SQLite database.
"""

import sqlite3

import pytest

from gatehouse.config import settings
from gatehouse.db import Core, _create_connection, get_core, init_db
from gatehouse.db.session import SessionOperations
from gatehouse.db.user import UserOperations


# ============================================================================
# _create_connection tests
# ============================================================================

def test_create_connection_returns_row_connection(db_path):
    """_create_connection() should return a connection with Row factory."""
    conn = _create_connection()
    assert isinstance(conn, sqlite3.Connection)
    assert conn.row_factory == sqlite3.Row
    conn.close()


def test_create_connection_enables_foreign_keys(db_path):
    """_create_connection() should enable foreign key constraints."""
    conn = _create_connection()
    assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    conn.close()


# ============================================================================
# init_db tests
# ============================================================================

def test_init_db_creates_tables(core):
    """init_db() should create users and sessions tables."""
    names = {
        row["name"]
        for row in core._conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    }
    assert {"users", "sessions", "_schema_metadata"} <= names


def test_init_db_is_idempotent(db_path, core):
    """Running init_db() twice should keep existing data."""
    core.user.insert_unique("sue", "hash")
    init_db()
    assert core.user.find_by_username("sue") is not None


def test_init_db_creates_parent_directory(tmp_path, monkeypatch):
    """init_db() should create the database directory if missing."""
    path = tmp_path / "nested" / "gatehouse.db"
    monkeypatch.setattr(settings, "database_path", str(path))
    init_db()
    assert path.exists()


# ============================================================================
# Core properties and lifecycle
# ============================================================================

def test_core_operations_are_cached(core):
    """Core.user and Core.session should be created once and cached."""
    assert isinstance(core.user, UserOperations)
    assert isinstance(core.session, SessionOperations)
    assert core.user is core.user
    assert core.session is core.session


def test_non_atomic_core_rejects_context_manager(db_path):
    """Only atomic Cores can be used in a with-statement."""
    core = get_core()
    with pytest.raises(RuntimeError, match="atomic=True"):
        with core:
            pass
    core.close()


def test_atomic_core_commits_on_success(db_path):
    """Writes inside an atomic block should be visible afterwards."""
    with get_core(atomic=True) as core:
        core.user.insert_unique("sue", "hash")

    check = get_core()
    assert check.user.find_by_username("sue") is not None
    check.close()


def test_atomic_core_rolls_back_on_exception(db_path):
    """An exception inside an atomic block should discard its writes."""
    with pytest.raises(ValueError):
        with get_core(atomic=True) as core:
            core.user.insert_unique("sue", "hash")
            raise ValueError("boom")

    check = get_core()
    assert check.user.find_by_username("sue") is None
    check.close()


def test_atomic_core_closes_connection(db_path):
    """Leaving an atomic block should close the connection."""
    with get_core(atomic=True) as core:
        conn = core._conn
    with pytest.raises(sqlite3.ProgrammingError):
        conn.execute("SELECT 1")


def test_core_wraps_given_connection(db_path):
    """Core should use the connection it is given."""
    conn = _create_connection()
    core = Core(conn)
    assert core._conn is conn
    assert core._atomic is False
    core.close()
