"""
Custom exceptions for the AI Studio API

Domain errors carry structured details so the error handlers can turn
them into JSON bodies the client acts on (for example an inline API-key
prompt on CredentialMissingError).
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class StudioException(Exception):
    """Base exception for AI Studio"""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class NotFoundError(StudioException):
    """Resource not found or not owned by the caller"""
    pass


class ModelNotFoundError(StudioException):
    """Requested model id is not in the registry"""

    def __init__(self, model_id: str):
        super().__init__(f"Model '{model_id}' not found", {"model": model_id})
        self.model_id = model_id


class CredentialMissingError(StudioException):
    """
    No usable API key resolved for a provider

    Carries the provider display name, the name of the missing setting and
    a help URL so the caller can prompt for a key inline.
    """

    def __init__(
        self,
        provider: str,
        provider_name: str,
        required_key: str,
        website: str,
        message: Optional[str] = None
    ):
        super().__init__(
            message or f"{provider_name} API key is not configured",
            {
                "provider": provider,
                "providerName": provider_name,
                "requiredKey": required_key,
                "website": website,
            }
        )
        self.provider = provider
        self.provider_name = provider_name
        self.required_key = required_key
        self.website = website


class ScopedCredentialUnsupportedError(CredentialMissingError):
    """
    A user-supplied key was resolved for a provider whose client only
    accepts the process-wide credential
    """
    pass


class DecryptionError(StudioException):
    """A stored credential could not be decrypted"""
    pass


class UpstreamProviderError(StudioException):
    """The vendor call failed; rate-limit-shaped failures are flagged"""

    def __init__(self, message: str, provider: str, rate_limited: bool = False):
        super().__init__(message, {"provider": provider})
        self.provider = provider
        self.rate_limited = rate_limited


class PersistenceError(StudioException):
    """A database write failed"""
    pass


class StreamInterruptedError(Exception):
    """
    Generation failed after the response started

    No JSON body can follow once bytes are out, so this has no handler and
    reaches the server, which drops the connection before the terminating
    chunk.
    """

    def __init__(self, error: UpstreamProviderError):
        super().__init__(error.message)
        self.error = error


class GitHubError(StudioException):
    """GitHub API request failed"""

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message, {"status_code": status_code})
        self.status_code = status_code


# HTTP exception helpers
def http_401_unauthorized(detail: str = "Invalid authentication credentials"):
    """Raise 401 Unauthorized"""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def http_404_not_found(detail: str = "Resource not found"):
    """Raise 404 Not Found"""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=detail,
    )


def http_400_bad_request(detail: str = "Bad request"):
    """Raise 400 Bad Request"""
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
    )
