"""User listing endpoint.

- GET /api/users - List users (requires an active session)
"""

import logging
import sqlite3

from flask import Blueprint, jsonify

from ..auth.decorators import session_required
from ..auth.schemas import SessionUser, UserResponse
from ..db import get_core
from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)


users_bp = Blueprint("users", __name__)


@users_bp.get("")
@session_required
def list_users(session_user: SessionUser):
    """
    List all users (public fields only).

    Returns:
        200: [{"id": 1, "username": "bob"}, ...]
        401: {"message": "You shall not pass!"}
    """
    core = get_core()
    try:
        rows = core.user.list_all()
    except sqlite3.Error as e:
        logger.error(f"User store failure listing users: {e}")
        raise DatabaseError("Server error") from e
    finally:
        core.close()

    logger.debug(f"User list requested by {session_user.username}")

    return jsonify([
        UserResponse(id=row["id"], username=row["username"]).model_dump()
        for row in rows
    ]), 200
