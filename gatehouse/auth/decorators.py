"""Authentication decorators for protected endpoints.

@session_required resolves the caller's session and passes the
authenticated SessionUser to the view as ``session_user``. Nothing is
stashed in flask.g.
"""

import logging
from functools import wraps

from flask import request

from ..exceptions import AuthenticationError
from .cookies import read_session_token
from .sessions import get_session_manager

logger = logging.getLogger(__name__)


def session_required(f):
    """
    Decorator to require an active session for endpoint access.

    Raises:
        AuthenticationError: If the request carries no live session

    Example:
    ```python
    @session_required
    def protected_endpoint(session_user):
        return jsonify({"id": session_user.id})
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        token = read_session_token(request)
        try:
            kwargs["session_user"] = get_session_manager().require_session(token)
        except AuthenticationError:
            logger.warning(f"Unauthenticated request to protected endpoint: {request.path}")
            raise
        return f(*args, **kwargs)

    return wrapper
