"""Resource endpoints that sit behind an authenticated session."""

from .users import users_bp

__all__ = ["users_bp"]
