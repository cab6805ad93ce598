"""Credential validators.

Each validator returns a value the handler continues with, or raises a
typed failure. Handlers call them explicitly in order:

    register: check_username_free -> check_password_length -> check_payload
    login:    check_username_exists -> check_payload

The payload-shape check deliberately runs after the store lookups, so a
body with no password still triggers a username lookup first.
"""

import logging

from ..db.user import UserOperations
from ..exceptions import AuthenticationError, ConflictError, UnprocessableError
from .schemas import Credentials, CredentialsPayload, UserRecord

logger = logging.getLogger(__name__)

PASSWORD_MIN_LENGTH = 4

USERNAME_TAKEN = "Username taken"
PASSWORD_TOO_SHORT = "Password must be longer than 3 chars"
INVALID_CREDENTIALS = "Invalid credentials"
PAYLOAD_REQUIRED = "username and password required"


def check_username_free(users: UserOperations, username: str | None) -> None:
    """Fail with ConflictError if a user with this username exists."""
    if users.find_by_username(username) is not None:
        logger.info(f"Registration rejected, username taken: {username}")
        raise ConflictError(USERNAME_TAKEN, {"username": username})


def check_username_exists(users: UserOperations, username: str | None) -> UserRecord:
    """
    Look up the user a login is for.

    Unknown usernames fail with the same AuthenticationError as a wrong
    password, so callers cannot tell which part of the credentials was wrong.

    Returns:
        The stored UserRecord, for the handler to verify against
    """
    row = users.find_by_username(username)
    if row is None:
        logger.warning(f"Failed login attempt for username: {username}")
        raise AuthenticationError(INVALID_CREDENTIALS)
    return UserRecord.from_row(row)


def check_password_length(password: str | None) -> str:
    """Fail with UnprocessableError if the password is missing or 3 chars or less."""
    if password is None or len(password) < PASSWORD_MIN_LENGTH:
        raise UnprocessableError(PASSWORD_TOO_SHORT)
    return password


def check_payload(payload: CredentialsPayload) -> Credentials:
    """Fail with UnprocessableError if username or password is missing or empty."""
    if not payload.username or not payload.password:
        raise UnprocessableError(PAYLOAD_REQUIRED)
    return Credentials(username=payload.username, password=payload.password)
