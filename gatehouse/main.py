"""Flask application entry point."""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .config import settings
from .db import init_db
from .exceptions import GatehouseError, ServerError
from .auth.sessions import EXTENSION_KEY, SessionManager, SessionStore, build_session_store

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Error handlers
def handle_gatehouse_error(error: GatehouseError):
    """Render any Gatehouse exception as {"message": ...} with its status."""
    if isinstance(error, ServerError):
        logger.error(f"{error.__class__.__name__}: {error.message} {error.details}")
    return jsonify({"message": error.message}), error.status_code


def handle_http_error(error: HTTPException):
    """Render werkzeug HTTP errors (404, 405, ...) as JSON."""
    return jsonify({"message": error.description}), error.code


def handle_internal_error(error: Exception):
    """Handle unexpected exceptions without leaking detail."""
    logger.exception(f"Internal error: {error}")
    return jsonify({"message": "Server error"}), 500


def create_app(session_store: SessionStore | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        session_store: Store to back sessions. Defaults to the one named by
            settings.session_backend.

    Returns:
        Configured Flask app with auth and users blueprints registered
    """
    app = Flask(__name__)

    CORS(app, origins=settings.cors_origins, supports_credentials=True)

    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    if session_store is None:
        session_store = build_session_store(settings.session_backend)
    app.extensions[EXTENSION_KEY] = SessionManager(
        session_store,
        max_age_seconds=settings.session_max_age_seconds,
    )

    app.register_error_handler(GatehouseError, handle_gatehouse_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_internal_error)

    @app.route("/health")
    def health():
        """Health check endpoint."""
        return jsonify({"status": "ok"})

    from .api import users_bp
    from .auth.api import auth_bp

    app.register_blueprint(auth_bp, url_prefix=settings.auth_prefix)
    app.register_blueprint(users_bp, url_prefix=settings.users_prefix)

    return app


app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
