"""
Centralized Error Handling

Maps the domain error taxonomy to JSON responses and logs each failure
once. Errors raised after a chat stream has started never reach these
handlers: the stream is simply ended.
"""

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from openai import APIError, RateLimitError, APITimeoutError
from sqlalchemy.exc import IntegrityError, OperationalError, DBAPIError
from typing import Dict, Any, List
import logging
import traceback

from backend.config import settings
from backend.core.exceptions import (
    StudioException,
    NotFoundError,
    ModelNotFoundError,
    CredentialMissingError,
    ScopedCredentialUnsupportedError,
    UpstreamProviderError,
    PersistenceError,
    GitHubError,
)
from backend.utils.sanitize import sanitize_string

logger = logging.getLogger(__name__)


class ErrorHandler:
    """Centralized error handling"""

    @staticmethod
    def classify_provider_error(error: Exception, provider: str) -> UpstreamProviderError:
        """
        Turn an exception raised by a provider call into UpstreamProviderError

        litellm re-raises vendor failures as subclasses of the openai
        exception types, so one set of checks covers every provider.

        Args:
            error: Exception raised while calling or streaming from the provider
            provider: Provider id the call was routed to

        Returns:
            UpstreamProviderError with rate_limited set for rate/quota errors
        """
        message = sanitize_string(str(error))

        if isinstance(error, RateLimitError):
            logger.warning(f"{provider} rate limit exceeded: {message}")
            return UpstreamProviderError(
                "The AI provider is rate limiting requests. Please try again later.",
                provider=provider,
                rate_limited=True
            )

        if isinstance(error, APITimeoutError):
            logger.warning(f"{provider} API timeout: {message}")
            return UpstreamProviderError(
                "The AI provider timed out. Please try again.",
                provider=provider
            )

        logger.error(f"{provider} API error: {message}")
        return UpstreamProviderError(
            "The AI provider returned an error.",
            provider=provider
        )

    @staticmethod
    def handle_openai_error(error: Exception) -> Dict[str, Any]:
        """
        Handle provider SDK errors raised outside the chat relay

        Args:
            error: OpenAI-compatible exception

        Returns:
            Error dictionary with message and details
        """
        if isinstance(error, RateLimitError):
            logger.warning(f"Provider rate limit exceeded: {sanitize_string(str(error))}")
            return {
                "error": "RATE_LIMITED",
                "message": "Rate limit exceeded. Please try again later.",
                "retry_after": 60
            }

        elif isinstance(error, APITimeoutError):
            logger.warning(f"Provider API timeout: {sanitize_string(str(error))}")
            return {
                "error": "UPSTREAM_TIMEOUT",
                "message": "Provider request timed out. Please try again."
            }

        logger.error(f"Provider API error: {sanitize_string(str(error))}")
        return {
            "error": "UPSTREAM_ERROR",
            "message": "Provider API error occurred. Please try again."
        }

    @staticmethod
    def handle_database_error(error: Exception) -> Dict[str, Any]:
        """
        Handle database errors

        Args:
            error: Database exception

        Returns:
            Error dictionary with message and details
        """
        if isinstance(error, IntegrityError):
            logger.warning(f"Database integrity error: {error}")
            return {
                "error": "integrity_error",
                "message": "Data integrity violation. Duplicate entry or constraint failed."
            }

        elif isinstance(error, (OperationalError, DBAPIError)):
            logger.error(f"Database error: {error}")
            return {
                "error": "database_error",
                "message": "Database error occurred."
            }

        logger.error(f"Unknown database error: {error}")
        return {
            "error": "unknown",
            "message": "An unexpected database error occurred."
        }

    @staticmethod
    def handle_validation_error(error: RequestValidationError) -> Dict[str, Any]:
        """
        Handle request validation errors with per-field detail

        Args:
            error: FastAPI validation exception

        Returns:
            Error dictionary with one entry per invalid field
        """
        details: List[Dict[str, str]] = []
        for item in error.errors():
            loc = [str(part) for part in item.get("loc", ()) if part not in ("body", "query", "path")]
            details.append({
                "field": ".".join(loc) or "body",
                "message": item.get("msg", "Invalid value"),
            })

        logger.warning(f"Validation error: {details}")
        return {
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed.",
            "details": details
        }

    @staticmethod
    def handle_studio_error(error: StudioException) -> Dict[str, Any]:
        """
        Handle domain errors

        Args:
            error: StudioException subclass

        Returns:
            Error dictionary; credential errors carry the provider details
            the client needs to prompt for a key
        """
        if isinstance(error, ScopedCredentialUnsupportedError):
            logger.warning(f"Scoped credential unsupported: {error.details}")
            return {"error": "API_KEY_UNSUPPORTED", "message": error.message, **error.details}

        if isinstance(error, CredentialMissingError):
            logger.info(f"Credential missing: {error.details}")
            return {"error": "API_KEY_MISSING", "message": error.message, **error.details}

        if isinstance(error, ModelNotFoundError):
            logger.warning(error.message)
            return {"error": "MODEL_NOT_FOUND", "message": error.message, **error.details}

        if isinstance(error, UpstreamProviderError):
            if error.rate_limited:
                return {
                    "error": "RATE_LIMITED",
                    "message": error.message,
                    "provider": error.provider,
                    "retry_after": 60
                }
            return {"error": "UPSTREAM_ERROR", "message": error.message, "provider": error.provider}

        if isinstance(error, PersistenceError):
            logger.error(f"Persistence error: {error.message}")
            return {"error": "PERSISTENCE_ERROR", "message": error.message}

        if isinstance(error, GitHubError):
            logger.warning(f"GitHub error: {error.message}")
            return {"error": "GITHUB_ERROR", "message": error.message}

        if isinstance(error, NotFoundError):
            return {"error": "NOT_FOUND", "message": error.message}

        logger.error(f"Unhandled studio error: {error.message}")
        return {"error": "INTERNAL_ERROR", "message": error.message}

    @staticmethod
    def status_for(error: StudioException) -> int:
        """HTTP status for a domain error"""
        if isinstance(error, CredentialMissingError):
            return status.HTTP_402_PAYMENT_REQUIRED
        if isinstance(error, ModelNotFoundError):
            return status.HTTP_400_BAD_REQUEST
        if isinstance(error, UpstreamProviderError):
            if error.rate_limited:
                return status.HTTP_429_TOO_MANY_REQUESTS
            return status.HTTP_502_BAD_GATEWAY
        if isinstance(error, GitHubError):
            return error.status_code
        if isinstance(error, NotFoundError):
            return status.HTTP_404_NOT_FOUND
        return status.HTTP_500_INTERNAL_SERVER_ERROR

    @staticmethod
    def handle_generic_error(error: Exception) -> Dict[str, Any]:
        """
        Handle generic/unknown errors

        Args:
            error: Exception

        Returns:
            Error dictionary
        """
        logger.error(f"Unexpected error: {error}\n{traceback.format_exc()}")
        data = {
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please try again.",
        }
        if settings.DEBUG:
            data["type"] = type(error).__name__
        return data


# Global exception handlers for FastAPI

async def studio_error_handler(request: Request, exc: StudioException):
    """FastAPI exception handler for domain errors"""
    error_data = ErrorHandler.handle_studio_error(exc)
    headers = {"Retry-After": "60"} if error_data.get("error") == "RATE_LIMITED" else None
    return JSONResponse(
        status_code=ErrorHandler.status_for(exc),
        content=error_data,
        headers=headers
    )


async def validation_error_handler(request: Request, exc: RequestValidationError):
    """FastAPI exception handler for malformed requests"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorHandler.handle_validation_error(exc)
    )


async def openai_error_handler(request: Request, exc: APIError):
    """FastAPI exception handler for provider SDK errors"""
    error_data = ErrorHandler.handle_openai_error(exc)
    status_code = (
        status.HTTP_429_TOO_MANY_REQUESTS
        if isinstance(exc, RateLimitError)
        else status.HTTP_503_SERVICE_UNAVAILABLE
    )
    return JSONResponse(status_code=status_code, content=error_data)


async def database_error_handler(request: Request, exc: IntegrityError):
    """FastAPI exception handler for database errors"""
    error_data = ErrorHandler.handle_database_error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_data
    )


async def generic_error_handler(request: Request, exc: Exception):
    """FastAPI exception handler for generic errors"""
    error_data = ErrorHandler.handle_generic_error(exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_data
    )


# Setup function for FastAPI app
def setup_error_handlers(app):
    """
    Setup global error handlers for FastAPI app

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(StudioException, studio_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(APIError, openai_error_handler)
    app.add_exception_handler(IntegrityError, database_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    logger.info("Error handlers registered")
