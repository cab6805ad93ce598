"""Pydantic schemas for authentication requests, records and responses."""

import sqlite3
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# Request Schemas
# ============================================================================


class CredentialsPayload(BaseModel):
    """Raw register/login body.

    Both fields are optional here: the validators decide, in order, which
    failure a request gets. Non-string values are treated as missing.
    """

    model_config = ConfigDict(extra="ignore")

    username: str | None = None
    password: str | None = None

    @field_validator("username", "password", mode="before")
    @classmethod
    def non_string_as_missing(cls, value: Any) -> str | None:
        return value if isinstance(value, str) else None

    @classmethod
    def from_json(cls, body: Any) -> "CredentialsPayload":
        """Build from a parsed JSON body; anything but an object is empty."""
        if not isinstance(body, dict):
            return cls()
        return cls.model_validate(body)


class Credentials(BaseModel):
    """Payload that passed the shape check."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# ============================================================================
# Record / Response Schemas
# ============================================================================


class UserResponse(BaseModel):
    """Public user data. Never includes the password hash."""

    id: int
    username: str


class SessionUser(UserResponse):
    """Snapshot of a user held by a server-side session."""


class UserRecord(BaseModel):
    """Stored user row, including the bcrypt hash."""

    id: int
    username: str
    password_hash: str
    created_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "UserRecord":
        return cls(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            created_at=row["created_at"],
        )

    def public(self) -> UserResponse:
        return UserResponse(id=self.id, username=self.username)


class MessageResponse(BaseModel):
    """Plain ``{"message": ...}`` body used by every auth endpoint."""

    message: str
