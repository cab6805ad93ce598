"""Shared test fixtures for gatehouse."""

import os
import tempfile

# Point the default database at a throwaway file before gatehouse is imported;
# gatehouse.main builds a module-level app on import.
_fd, _import_db_path = tempfile.mkstemp(suffix=".db")
os.close(_fd)
os.environ.setdefault("GATEHOUSE_DATABASE_PATH", _import_db_path)

import pytest

from gatehouse.auth.schemas import SessionUser
from gatehouse.auth.sessions import MemorySessionStore
from gatehouse.config import settings
from gatehouse.db import get_core, init_db
from gatehouse.main import create_app


@pytest.fixture(autouse=True)
def fast_bcrypt(monkeypatch):
    """Use the minimum bcrypt work factor so tests stay fast."""
    monkeypatch.setattr(settings, "bcrypt_work_factor", 4)


@pytest.fixture
def db_path(monkeypatch):
    """Fresh temp-file database with schema applied.

    A file (not :memory:) so every get_core() call sees the same data.
    """
    fd, path = tempfile.mkstemp(suffix=".db")
    os.close(fd)
    monkeypatch.setattr(settings, "database_path", path)
    init_db()

    yield path

    try:
        os.unlink(path)
    except OSError:
        pass


@pytest.fixture
def core(db_path):
    """Autocommit Core on the test database."""
    core = get_core()
    yield core
    core.close()


@pytest.fixture
def stored_user(core) -> SessionUser:
    """A user row to hang sessions off (sessions.user_id is a foreign key)."""
    user_id = core.user.insert_unique("sue", "not-a-real-hash")
    return SessionUser(id=user_id, username="sue")


@pytest.fixture
def app(db_path):
    """App with the default (sqlite) session store."""
    app = create_app()
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def memory_store():
    return MemorySessionStore()


@pytest.fixture
def memory_client(db_path, memory_store):
    """Test client whose sessions live in a MemorySessionStore."""
    app = create_app(session_store=memory_store)
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def registered_user(client):
    """Register sue/1234 through the API and return (response json, password)."""
    response = client.post("/api/auth/register", json={"username": "sue", "password": "1234"})
    assert response.status_code == 200
    return response.get_json(), "1234"


@pytest.fixture
def logged_in_client(client, registered_user):
    """Test client holding a live session cookie for sue."""
    response = client.post("/api/auth/login", json={"username": "sue", "password": "1234"})
    assert response.status_code == 200
    return client
