"""Exception classes for AI Studio SDK"""

from typing import Any, Dict, List, Optional


class AIStudioError(Exception):
    """Base exception for all AI Studio SDK errors"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class AuthenticationError(AIStudioError):
    """Raised when the access token is invalid or missing (401)"""
    pass


class CredentialMissingError(AIStudioError):
    """
    Raised when no API key is configured for the model's provider (402)

    Carries what a UI needs to prompt for the key inline.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = 402,
        provider: Optional[str] = None,
        provider_name: Optional[str] = None,
        required_key: Optional[str] = None,
        website: Optional[str] = None,
        code: str = "API_KEY_MISSING",
    ):
        super().__init__(message, status_code)
        self.provider = provider
        self.provider_name = provider_name
        self.required_key = required_key
        self.website = website
        self.code = code


class NotFoundError(AIStudioError):
    """Raised when resource is not found (404)"""
    pass


class ValidationError(AIStudioError):
    """Raised when request validation fails (400/422)"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message, status_code)
        self.details = details or []


class RateLimitError(AIStudioError):
    """Raised when a rate limit is exceeded (429)"""

    def __init__(self, message: str, status_code: Optional[int] = 429, retry_after: Optional[int] = None):
        super().__init__(message, status_code)
        self.retry_after = retry_after


class APIError(AIStudioError):
    """Raised for server errors (5xx) or unknown errors"""
    pass
