"""Session token generation.

This is the ONLY module that should import secrets. All other code should
use secret.generate_session_token().
"""

import secrets

# 32 bytes of entropy, ~43 URL-safe characters
SESSION_TOKEN_BYTES = 32


def generate_session_token() -> str:
    """Generate an opaque, URL-safe session token."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
