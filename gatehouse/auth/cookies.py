"""Session cookie handling at the HTTP boundary.

The token is the only thing that travels in the cookie. It is HTTP-only
and SameSite=Lax; Secure follows settings.session_cookie_secure.
"""

from flask import Request, Response

from ..config import settings


def read_session_token(request: Request) -> str | None:
    """Extract the session token from request cookies."""
    return request.cookies.get(settings.session_cookie_name) or None


def set_session_cookie(response: Response, token: str) -> None:
    """Attach the session cookie to a response."""
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="Lax",
        secure=settings.session_cookie_secure,
    )


def clear_session_cookie(response: Response) -> None:
    """Expire the session cookie on the client."""
    response.delete_cookie(
        settings.session_cookie_name,
        httponly=True,
        samesite="Lax",
        secure=settings.session_cookie_secure,
    )
