"""Exception hierarchy for Gatehouse.

Every exception carries the HTTP status it maps to, so the Flask error
handlers in main.py can render any of them uniformly as
``{"message": ...}``.
"""


class GatehouseError(Exception):
    """Base exception for all Gatehouse errors."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConflictError(GatehouseError):
    """Username already exists."""

    status_code = 422


class UnprocessableError(GatehouseError):
    """Malformed payload or password too weak."""

    status_code = 422


class AuthenticationError(GatehouseError):
    """Unknown user, wrong password, or no active session."""

    status_code = 401


class ServerError(GatehouseError):
    """Infrastructure failure. Rendered without credential detail."""

    status_code = 500


class HashingError(ServerError):
    """Password hashing failed."""


class DatabaseError(ServerError):
    """User store failure."""


class SessionStoreError(ServerError):
    """Session store failure (create or destroy)."""
