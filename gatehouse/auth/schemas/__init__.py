"""Authentication Pydantic schemas for API validation."""

from .auth import (
    Credentials,
    CredentialsPayload,
    MessageResponse,
    SessionUser,
    UserRecord,
    UserResponse,
)

__all__ = [
    "Credentials",
    "CredentialsPayload",
    "MessageResponse",
    "SessionUser",
    "UserRecord",
    "UserResponse",
]
