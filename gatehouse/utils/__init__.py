"""Utility functions for Gatehouse.

Import convention: use module-level imports for clarity.

    from utils import isodatetime, secret
    timestamp = isodatetime.now()
    token = secret.generate_session_token()
"""

from . import isodatetime, secret

__all__ = ["isodatetime", "secret"]
