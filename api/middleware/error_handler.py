"""
Centralized Error Handling Middleware for Flask

Provides consistent error responses and logging across all endpoints.
"""

from flask import Flask, jsonify, request
from functools import wraps
import logging
import traceback
from typing import Tuple, Dict, Callable

from app.errors import AppError

logger = logging.getLogger(__name__)


def setup_error_handlers(app: Flask):
    """
    Register error handlers with Flask app

    Usage:
        from api.middleware.error_handler import setup_error_handlers

        app = Flask(__name__)
        setup_error_handlers(app)
    """

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError) -> Tuple[Dict, int]:
        """Handle custom application errors"""
        status_code = status_code_for(error)
        if status_code >= 500:
            logger.error(f"App Error [{error.code}]: {error.message}")
        else:
            logger.warning(f"App Error [{error.code}]: {error.message}")
        return jsonify(error.to_dict()), status_code

    @app.errorhandler(404)
    def handle_flask_not_found(error) -> Tuple[Dict, int]:
        """Handle Flask 404 errors"""
        return jsonify({
            'error': True,
            'code': 'ENDPOINT_NOT_FOUND',
            'message': f"Endpoint not found: {request.path}",
            'details': {'method': request.method, 'path': request.path}
        }), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error) -> Tuple[Dict, int]:
        """Handle method not allowed errors"""
        return jsonify({
            'error': True,
            'code': 'METHOD_NOT_ALLOWED',
            'message': f"Method {request.method} not allowed for {request.path}",
            'details': None
        }), 405

    @app.errorhandler(413)
    def handle_payload_too_large(error) -> Tuple[Dict, int]:
        """Handle payload too large errors"""
        return jsonify({
            'error': True,
            'code': 'PAYLOAD_TOO_LARGE',
            'message': "Import file too large. Maximum size is 16MB.",
            'details': None
        }), 413

    @app.errorhandler(Exception)
    def handle_unexpected_error(error) -> Tuple[Dict, int]:
        """Handle all unexpected exceptions"""
        logger.error(f"Unexpected Error: {type(error).__name__}: {error}")
        logger.error(traceback.format_exc())
        return jsonify({
            'error': True,
            'code': 'UNEXPECTED_ERROR',
            'message': 'An unexpected error occurred',
            'details': {'type': type(error).__name__} if app.debug else None
        }), 500


def status_code_for(error: AppError) -> int:
    """Map error codes to HTTP status codes"""
    code_map = {
        'VALIDATION_ERROR': 400,
        'STRUCTURAL_ERROR': 400,
        'NOT_FOUND': 404,
        'FUTURE_VERSION': 409,
        'MIGRATION_STEP_FAILED': 422,
        'DATABASE_ERROR': 500,
        'CONFIG_ERROR': 500,
        'DUPLICATE_MIGRATION': 500,
        'SERVICE_UNAVAILABLE': 503,
    }
    return code_map.get(error.code, 500)


def safe_endpoint(func: Callable) -> Callable:
    """
    Decorator for safe endpoint execution with error handling

    Catches exceptions and converts them to proper API responses.

    Usage:
        @app.route('/api/data')
        @safe_endpoint
        def get_data():
            # Your code here
            pass
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AppError:
            # Let the error handler deal with it
            raise
        except Exception as e:
            logger.error(f"Endpoint {func.__name__} failed: {e}")
            logger.error(traceback.format_exc())
            # Convert to AppError for consistent handling
            raise AppError(
                message=f"Operation failed: {str(e)}",
                code="ENDPOINT_ERROR"
            ) from e
    return wrapper


def log_request():
    """Log incoming request details"""
    logger.debug(f"Request: {request.method} {request.path}")
    if request.content_length:
        logger.debug(f"Content-Length: {request.content_length}")


def log_response(response):
    """Log response details"""
    logger.debug(f"Response: {response.status_code}")
    return response


def setup_request_logging(app: Flask):
    """
    Setup request/response logging

    Usage:
        setup_request_logging(app)
    """
    app.before_request(log_request)
    app.after_request(log_response)
