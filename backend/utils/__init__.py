"""
Utility Functions and Classes

Provides error handling and log sanitizing helpers.
"""

from backend.utils.error_handlers import (
    ErrorHandler,
    setup_error_handlers
)
from backend.utils.sanitize import (
    mask_secret,
    sanitize_headers,
    sanitize_string
)

__all__ = [
    "ErrorHandler",
    "setup_error_handlers",
    "mask_secret",
    "sanitize_headers",
    "sanitize_string"
]
