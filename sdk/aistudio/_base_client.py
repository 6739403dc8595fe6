"""Base client implementation with shared request and error-mapping logic"""

from typing import Any, Dict, Optional

import httpx

from .version import __version__
from .exceptions import (
    AuthenticationError,
    CredentialMissingError,
    NotFoundError,
    ValidationError,
    RateLimitError,
    APIError,
)

# Requests safe to send twice; chat turns are never retried
IDEMPOTENT_METHODS = {"GET", "PUT", "DELETE"}


class BaseClient:
    """
    Base client with shared logic for HTTP requests and error handling.

    This class provides:
    - Authentication headers
    - Error body parsing and exception mapping
    - Retry decisions with exponential backoff
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "http://localhost:8000/api/v1",
        timeout: float = 60.0,
        max_retries: int = 3,
    ):
        """
        Initialize base client.

        Args:
            api_key: Access token issued by /auth/register (required)
            base_url: Base URL for API (default: http://localhost:8000/api/v1)
            timeout: Request timeout in seconds (default: 60.0)
            max_retries: Maximum attempts for idempotent requests on
                connection failures (default: 3)

        Raises:
            ValueError: If api_key is empty
        """
        if not api_key:
            raise ValueError("api_key is required")

        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries

        # Will be set by subclasses
        self._http_client: Optional[httpx.AsyncClient] = None

    def _get_headers(self, include_content_type: bool = True) -> Dict[str, str]:
        """
        Get authentication and default headers for requests

        Args:
            include_content_type: Whether to include Content-Type: application/json

        Returns:
            Dict of headers including Authorization and User-Agent
        """
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "User-Agent": f"aistudio-python/{__version__}",
        }

        if include_content_type:
            headers["Content-Type"] = "application/json"

        return headers

    @staticmethod
    def _parse_error_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    def _handle_error(self, response: httpx.Response) -> None:
        """
        Handle error responses and raise appropriate exceptions.

        The API answers either with {"detail": ...} or with
        {"error": CODE, "message": ..., ...}; both are understood.

        Args:
            response: HTTP response object (body already read)

        Raises:
            AuthenticationError: For 401 responses
            CredentialMissingError: For 402 responses
            NotFoundError: For 404 responses
            ValidationError: For 400 and 422 responses
            RateLimitError: For 429 responses
            APIError: For other error responses
        """
        if response.is_success:
            return

        status_code = response.status_code
        data = self._parse_error_body(response)
        message = data.get("message") or data.get("detail") or response.text or f"HTTP {status_code} error"
        if not isinstance(message, str):
            message = str(message)

        if status_code == 401:
            raise AuthenticationError(message, status_code)
        elif status_code == 402:
            raise CredentialMissingError(
                message,
                status_code,
                provider=data.get("provider"),
                provider_name=data.get("providerName"),
                required_key=data.get("requiredKey"),
                website=data.get("website"),
                code=data.get("error", "API_KEY_MISSING"),
            )
        elif status_code == 404:
            raise NotFoundError(message, status_code)
        elif status_code in (400, 422):
            raise ValidationError(message, status_code, details=data.get("details"))
        elif status_code == 429:
            retry_after = response.headers.get("Retry-After")
            raise RateLimitError(
                message,
                status_code,
                retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
            )
        else:
            raise APIError(message, status_code)

    def _should_retry(self, method: str, exception: Optional[Exception]) -> bool:
        """
        Determine if a request should be retried.

        Only connection-level failures of idempotent requests are retried;
        HTTP error statuses (rate limits included) are surfaced as-is.
        """
        if method.upper() not in IDEMPOTENT_METHODS:
            return False
        return isinstance(exception, httpx.TransportError)

    def _calculate_backoff(self, attempt: int) -> float:
        """
        Calculate exponential backoff delay.

        Args:
            attempt: Current retry attempt (0-indexed)

        Returns:
            float: Delay in seconds
        """
        return min(2 ** attempt, 16)  # Max 16 seconds

    def _prepare_request_url(self, path: str) -> str:
        """Full URL from a path (e.g. "/projects") or a full URL"""
        return path if path.startswith("http") else f"{self.base_url}{path}"
