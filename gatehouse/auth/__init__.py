"""Authentication module for Gatehouse.

This module provides session-based authentication:
- Schema validation for auth payloads
- Password hashing and verification (bcrypt)
- Ordered credential validators
- Server-side sessions referenced by a cookie token

Auth endpoints (mounted under settings.auth_prefix, default /api/auth):
- POST /register - Create a user
- POST /login - Verify credentials and start a session
- GET /logout - Destroy the current session
"""

from . import password, schemas, sessions, validators

__all__ = ["password", "schemas", "sessions", "validators"]
