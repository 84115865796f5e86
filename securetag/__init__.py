# SecureTag - App Package
"""
Main application package for the SecureTag verification service.
Provides the Flask application factory and the core verification components.
"""

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from securetag.config import get_config
from securetag.modules.models import ValidationError
from securetag.service import TagService

__version__ = "1.0.0"
__description__ = "Badge and tag verification service for QR codes and NFC tags"

logger = logging.getLogger(__name__)


def create_app(config_name=None, service=None, **overrides):
    """
    Build the Flask application.

    Args:
        config_name (str): Key into the configuration map, defaults to FLASK_ENV
        service (TagService): Prebuilt service, otherwise one is built from config
        **overrides: Individual config values to override

    Returns:
        Flask: Configured application
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.config.update(overrides)
    config_class.init_app(app)

    app.extensions['securetag'] = service if service is not None else TagService.from_config(app.config)

    from securetag.routes import api_bp
    app.register_blueprint(api_bp)

    register_error_handlers(app)
    return app


def register_error_handlers(app):
    """Map client errors, unknown routes and uncaught exceptions to JSON responses"""

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return jsonify({
            'success': False,
            'verified': False,
            'message': 'Invalid request',
            'description': str(e)
        }), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        if e.code == 404:
            message = 'Endpoint not found'
        else:
            message = e.description
        return jsonify({
            'success': False,
            'message': message
        }), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e):
        logger.exception(f"Unhandled error: {str(e)}")
        return jsonify({
            'success': False,
            'message': 'Internal server error',
            'error': str(e) if app.debug else 'Something went wrong'
        }), 500


__all__ = [
    'create_app',
    'TagService',
    'ValidationError'
]
