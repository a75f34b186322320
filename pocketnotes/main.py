"""Flask application entry point."""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .auth import AuthServices
from .auth.middleware import enforce_route_policy, public
from .config import Settings, settings
from .db import init_db
from .exceptions import PocketNotesError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Error handlers
def handle_pocketnotes_error(error: PocketNotesError):
    """Render any PocketNotesError with its mapped status code."""
    response = {
        "error": {
            "type": error.error_type,
            "message": error.message
        }
    }
    if error.details:
        response["error"]["details"] = error.details
    return jsonify(response), error.status_code


def handle_http_error(error: HTTPException):
    """Render werkzeug HTTP errors (404, 405, ...) in the same JSON shape."""
    return jsonify({
        "error": {
            "type": error.name.replace(" ", ""),
            "message": error.description
        }
    }), error.code


def handle_internal_error(error: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Internal error: {error}")
    return jsonify({
        "error": {
            "type": "InternalError",
            "message": "An internal error occurred"
        }
    }), 500


@public
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


def create_app(config: Settings | None = None) -> Flask:
    """Build and return the Flask application.

    Args:
        config: Settings to use (defaults to the module-level singleton)
    """
    config = config or settings

    app = Flask(__name__)
    app.config["DATABASE_PATH"] = config.database_path

    # CORS configuration
    CORS(app, origins=config.cors_origins, supports_credentials=True)

    # Auth components are built once from an immutable config snapshot
    app.extensions["pocketnotes"] = AuthServices.from_config(config.auth_config())

    # Database initialization (runs once on app startup)
    try:
        init_db(config.database_path)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    # Every view must be @public or @auth_required
    app.before_request(enforce_route_policy)

    app.register_error_handler(PocketNotesError, handle_pocketnotes_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_internal_error)

    app.add_url_rule("/health", view_func=health)

    # Register API blueprints
    from .api.notes import notes_bp
    from .auth.api import auth_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(notes_bp)

    return app


# Default app instance (used by `flask --app pocketnotes.main run`)
app = create_app()


if __name__ == "__main__":
    app.run(debug=True)
