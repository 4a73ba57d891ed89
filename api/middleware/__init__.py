"""
API Middleware Package

Error responses (AppError -> JSON with mapped HTTP status) and optional
request logging for the maintenance API.
"""

from api.middleware.error_handler import (
    setup_error_handlers,
    setup_request_logging,
    safe_endpoint,
    status_code_for
)

__all__ = [
    'setup_error_handlers',
    'setup_request_logging',
    'safe_endpoint',
    'status_code_for'
]
