"""Flask application factory.

The app receives a Settings object and builds one ConfluenceService, one
TranscriptionService and one UploadHandler from it; blueprints read them from
``app.extensions``. Errors raised anywhere in a request are converted here,
once, into ``{"success": false, "error": ...}`` with the status the error
type maps to.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from flask import Flask, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

from .. import __version__
from ..config import Settings
from ..confluence_client.confluence_service import ConfluenceService
from ..errors import MeetscribeError
from ..page_tree import configure_collation
from ..transcription import MAX_UPLOAD_BYTES, TranscriptionService, UploadHandler
from .confluence_routes import confluence_bp
from .responses import error_response
from .transcription_routes import transcription_bp

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'meetscribe'


def create_app(
    settings: Settings,
    confluence_service: Optional[ConfluenceService] = None,
    transcription_service: Optional[TranscriptionService] = None,
    upload_handler: Optional[UploadHandler] = None
) -> Flask:
    """Build the Flask application.

    Args:
        settings: Application settings
        confluence_service: Override for the Confluence service (tests)
        transcription_service: Override for the transcription service (tests)
        upload_handler: Override for the upload handler (tests)

    Returns:
        Configured Flask app
    """
    configure_collation()

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = MAX_UPLOAD_BYTES
    app.json.sort_keys = False

    app.extensions[EXTENSION_KEY] = {
        'settings': settings,
        'confluence': confluence_service or ConfluenceService(settings.confluence),
        'transcription': transcription_service or TranscriptionService(settings.openai),
        'uploads': upload_handler or UploadHandler(settings.server.upload_dir),
    }

    prefix = settings.server.api_prefix.rstrip('/')
    app.register_blueprint(transcription_bp, url_prefix=f"{prefix}/transcription")
    app.register_blueprint(confluence_bp, url_prefix=f"{prefix}/confluence")

    _register_hooks(app, settings)
    _register_error_handlers(app)

    @app.get('/')
    def index():
        return {
            'message': 'Meeting transcription backend',
            'version': __version__,
            'status': 'running',
            'timestamp': datetime.now(timezone.utc).isoformat(),
        }

    return app


def _register_hooks(app: Flask, settings: Settings) -> None:
    CORS(
        app,
        origins=[settings.server.frontend_url],
        supports_credentials=True,
        methods=['GET', 'POST', 'OPTIONS'],
        allow_headers=['Content-Type', 'Authorization'],
    )

    @app.before_request
    def log_request():
        logger.info(f"{request.method} {request.path}")


def _register_error_handlers(app: Flask) -> None:

    @app.errorhandler(MeetscribeError)
    def handle_app_error(error: MeetscribeError):
        if error.http_status >= 500:
            logger.error(f"{request.method} {request.path} failed: {error}")
        else:
            logger.warning(f"{request.method} {request.path} rejected: {error}")
        return error_response(str(error), error.http_status)

    @app.errorhandler(RequestEntityTooLarge)
    def handle_too_large(error: RequestEntityTooLarge):
        limit_mb = MAX_UPLOAD_BYTES // (1024 * 1024)
        return error_response(f"File is too large (max {limit_mb}MB)", 400)

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        if error.code == 404:
            return error_response("API endpoint not found", 404)
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception):
        logger.exception(f"Unhandled error during {request.method} {request.path}")
        return error_response("Internal server error", 500)
