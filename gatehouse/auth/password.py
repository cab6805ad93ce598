"""Password hashing and verification using bcrypt.

Bcrypt provides per-hash salts and an adaptive work factor. The factor
comes from settings.bcrypt_work_factor (11 by default, i.e. 2^11 rounds).

Bcrypt only reads the first 72 bytes of a password. Longer passwords are
cut to 72 UTF-8 bytes before hashing and before verifying, so any length
above the minimum is accepted and the same bytes are compared both ways.
"""

import logging

import bcrypt

from ..config import settings
from ..exceptions import HashingError

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72

# Burned on logins for unknown usernames; see verify_against_dummy()
_dummy_hash: str | None = None


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int | None = None) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password (only the first 72 bytes count)
        rounds: Work factor override (defaults to settings.bcrypt_work_factor)

    Returns:
        Bcrypt hash string (60 characters, includes salt and cost)

    Raises:
        HashingError: If the password cannot be hashed. The message is
            generic so nothing about the credential reaches the client.
    """
    if not password:
        raise HashingError("Server error", {"reason": "empty password"})

    work_factor = rounds if rounds is not None else settings.bcrypt_work_factor
    try:
        salt = bcrypt.gensalt(rounds=work_factor)
        hashed = bcrypt.hashpw(_password_bytes(password), salt)
    except (ValueError, TypeError) as e:
        logger.error(f"Password hashing failed: {e.__class__.__name__}")
        raise HashingError("Server error", {"reason": str(e)}) from e

    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify a password against its bcrypt hash in constant time.

    Never raises: empty input or a malformed hash returns False.
    """
    if not password or not password_hash:
        return False

    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        logger.warning("Password verification against malformed hash")
        return False


def verify_against_dummy(password: str | None) -> bool:
    """
    Spend the same bcrypt work as a real verification, then return False.

    Login calls this when the username is unknown, so unknown users and
    wrong passwords take comparable time. The dummy hash is made once at
    the configured work factor.
    """
    global _dummy_hash
    if _dummy_hash is None:
        _dummy_hash = hash_password("gatehouse-dummy-password")
    verify_password(password or "x", _dummy_hash)
    return False
