"""Authentication API endpoints for Gatehouse.

These endpoints handle session-based authentication and return JSON:
- POST /register - Create a user
- POST /login - Verify credentials, start a session, set the cookie
- GET /logout - Destroy the session, clear the cookie

Each handler runs the credential validators explicitly and in order; see
validators.py for the ordering.
"""

import logging
import sqlite3

from flask import Blueprint, jsonify, request

from ..db import get_core
from ..exceptions import AuthenticationError, DatabaseError, SessionStoreError
from . import cookies, password, validators
from .schemas import CredentialsPayload, MessageResponse, UserRecord, UserResponse
from .sessions import get_session_manager

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


def _payload() -> CredentialsPayload:
    return CredentialsPayload.from_json(request.get_json(silent=True))


@auth_bp.post("/register")
def register():
    """
    Create a user.

    Example request:
    ```json
    {"username": "sue", "password": "1234"}
    ```

    Example response (200):
    ```json
    {"id": 2, "username": "sue"}
    ```

    Error Responses:
        422: {"message": "Username taken"}
        422: {"message": "Password must be longer than 3 chars"}
        422: {"message": "username and password required"}
        500: {"message": "Server error"}
    """
    payload = _payload()

    core = get_core()
    try:
        validators.check_username_free(core.user, payload.username)
        validators.check_password_length(payload.password)
        credentials = validators.check_payload(payload)

        password_hash = password.hash_password(credentials.password)
        user_id = core.user.insert_unique(credentials.username, password_hash)
    except sqlite3.Error as e:
        logger.error(f"User store failure during registration: {e}")
        raise DatabaseError("Server error") from e
    finally:
        core.close()

    logger.info(f"User registered: {credentials.username} (id={user_id})")

    return jsonify(UserResponse(id=user_id, username=credentials.username).model_dump()), 200


@auth_bp.post("/login")
def login():
    """
    Verify credentials and start a session.

    On success the session token is set as an HTTP-only cookie.

    Example request:
    ```json
    {"username": "sue", "password": "1234"}
    ```

    Example response (200):
    ```json
    {"message": "Welcome sue!"}
    ```

    Error Responses:
        401: {"message": "Invalid credentials"}  (unknown user or wrong password)
        422: {"message": "username and password required"}
    """
    payload = _payload()

    core = get_core()
    try:
        user: UserRecord = validators.check_username_exists(core.user, payload.username)
    except AuthenticationError:
        # Unknown usernames cost a bcrypt round too, so timing matches a wrong password
        password.verify_against_dummy(payload.password)
        raise
    except sqlite3.Error as e:
        logger.error(f"User store failure during login: {e}")
        raise DatabaseError("Server error") from e
    finally:
        core.close()

    credentials = validators.check_payload(payload)

    if not password.verify_password(credentials.password, user.password_hash):
        logger.warning(f"Failed login attempt for username: {credentials.username}")
        raise AuthenticationError(validators.INVALID_CREDENTIALS)

    token = get_session_manager().create_session(user.public())

    logger.info(f"Successful login: {user.username}")

    response = jsonify(MessageResponse(message=f"Welcome {user.username}!").model_dump())
    cookies.set_session_cookie(response, token)
    return response, 200


@auth_bp.get("/logout")
def logout():
    """
    Destroy the current session.

    Idempotent: without a live session this succeeds with "no session".

    Example response (200):
    ```json
    {"message": "logged out!"}
    ```

    Error Responses:
        500: {"message": "Could not logout"}
    """
    manager = get_session_manager()
    token = cookies.read_session_token(request)

    try:
        session_user = manager.require_session(token)
        destroyed = manager.destroy_session(token)
    except AuthenticationError:
        destroyed = False
    except SessionStoreError as e:
        logger.error(f"Session store failure during logout: {e.details}")
        raise SessionStoreError("Could not logout") from e

    message = "logged out!" if destroyed else "no session"
    if destroyed:
        logger.info(f"Logged out: {session_user.username}")

    response = jsonify(MessageResponse(message=message).model_dump())
    cookies.clear_session_cookie(response)
    return response, 200
