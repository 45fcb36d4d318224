"""
JSON error handlers for the geo_atlas API
"""

import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from ..exceptions import AtlasError

logger = logging.getLogger(__name__)


def register_error_handlers(app_or_blueprint):
    """Register error handlers for Flask app or blueprint"""

    @app_or_blueprint.errorhandler(AtlasError)
    def atlas_error(error):
        """Handle service errors with their own status and message"""
        logger.warning(f"{error.status_code} error: {request.method} {request.path} - {error}")
        return jsonify({'message': str(error)}), error.status_code

    @app_or_blueprint.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors"""
        logger.warning(f"404 error: {request.url}")
        return jsonify({'message': 'Resource not found'}), 404

    @app_or_blueprint.errorhandler(405)
    def method_not_allowed_error(error):
        """Handle 405 errors"""
        logger.warning(f"405 error: {request.method} {request.url}")
        return jsonify({'message': 'Method not allowed'}), 405

    @app_or_blueprint.errorhandler(413)
    def request_too_large_error(error):
        """Handle uploads over the configured size limit"""
        logger.warning(f"413 error: {request.url}")
        return jsonify({'message': 'File too large'}), 413

    @app_or_blueprint.errorhandler(HTTPException)
    def http_error(error):
        """Handle remaining HTTP errors (e.g. malformed requests)"""
        logger.warning(f"{error.code} error: {request.url}")
        return jsonify({'message': error.description or error.name}), error.code

    @app_or_blueprint.errorhandler(Exception)
    def handle_exception(error):
        """Handle all other exceptions"""
        logger.error(f"Unhandled exception: {request.url} - {str(error)}", exc_info=True)
        return jsonify({'message': 'An unexpected error occurred'}), 500
