"""ISO 8601 timestamp conversion utilities.

This module centralizes all transformations between Python datetime objects
and ISO 8601 timestamp strings. Session expiry is stored and compared as
these strings, so all timestamp operations should go through here.
"""

from datetime import UTC, datetime, timedelta


def to_timestamp(dt: datetime) -> str:
    """Convert datetime to ISO 8601 UTC timestamp string.

    Microseconds are always emitted so timestamps compare correctly as text.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")


def to_datetime(timestamp: str) -> datetime:
    """Convert ISO 8601 UTC timestamp string to datetime."""
    return datetime.fromisoformat(timestamp.replace('Z', '+00:00'))


def utcnow() -> datetime:
    """Get current UTC time as an aware datetime."""
    return datetime.now(UTC)


def now() -> str:
    """Get current UTC timestamp as ISO 8601 string."""
    return to_timestamp(utcnow())


def after_seconds(seconds: int) -> datetime:
    """Get the aware UTC datetime ``seconds`` from now."""
    return utcnow() + timedelta(seconds=seconds)
