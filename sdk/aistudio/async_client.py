"""Asynchronous AI Studio SDK client"""

import asyncio
from typing import Any, AsyncIterator

import httpx

from ._base_client import BaseClient
from .exceptions import APIError
from .resources import (
    AsyncAuthResource,
    AsyncProjectsResource,
    AsyncFilesResource,
    AsyncChatResource,
    AsyncModelsResource,
    AsyncAPIKeysResource,
    AsyncGitHubResource,
)


class AsyncClient(BaseClient):
    """
    Asynchronous client for the AI Studio API.

    Example:
        >>> async with AsyncClient(api_key="sk_studio_...") as client:
        ...     project = await client.projects.create(name="Landing page")
        ...     async for text in client.chat.stream(project.id, "Add a navbar", "gpt-4o"):
        ...         print(text, end="")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "http://localhost:8000/api/v1",
        timeout: float = 60.0,
        max_retries: int = 3,
    ):
        """
        Initialize asynchronous AI Studio client.

        Args:
            api_key: Access token issued by /auth/register (required)
            base_url: Base URL for API (default: http://localhost:8000/api/v1)
            timeout: Request timeout in seconds (default: 60.0)
            max_retries: Maximum attempts for idempotent requests (default: 3)

        Raises:
            ValueError: If api_key is empty
        """
        super().__init__(api_key, base_url, timeout, max_retries)

        self._http_client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            follow_redirects=True,
        )

        self.auth = AsyncAuthResource(self)
        self.projects = AsyncProjectsResource(self)
        self.files = AsyncFilesResource(self)
        self.chat = AsyncChatResource(self)
        self.models = AsyncModelsResource(self)
        self.api_keys = AsyncAPIKeysResource(self)
        self.github = AsyncGitHubResource(self)

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an async HTTP request.

        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE)
            path: Request path (e.g., "/projects")
            **kwargs: Additional arguments passed to httpx (json, params, etc.)

        Returns:
            httpx.Response: Successful response

        Raises:
            AuthenticationError: Invalid token (401)
            CredentialMissingError: Provider key missing (402)
            NotFoundError: Resource not found (404)
            ValidationError: Invalid request (400/422)
            RateLimitError: Rate limit exceeded (429)
            APIError: Server error or connection failure
        """
        if "headers" not in kwargs:
            kwargs["headers"] = self._get_headers()

        url = self._prepare_request_url(path)

        for attempt in range(self.max_retries):
            try:
                response = await self._http_client.request(method, url, **kwargs)
            except httpx.TransportError as e:
                if attempt < self.max_retries - 1 and self._should_retry(method, e):
                    await asyncio.sleep(self._calculate_backoff(attempt))
                    continue
                raise APIError(f"Request failed: {e}") from e

            self._handle_error(response)
            return response

        raise APIError("Request failed: no attempts made")

    async def stream_text(self, method: str, path: str, **kwargs: Any) -> AsyncIterator[str]:
        """
        Stream a plain-text response body chunk by chunk.

        Error statuses are raised before the first chunk. Closing the
        iterator early closes the HTTP response, which aborts the
        generation server-side.
        """
        if "headers" not in kwargs:
            kwargs["headers"] = self._get_headers()

        url = self._prepare_request_url(path)
        try:
            async with self._http_client.stream(method, url, **kwargs) as response:
                if not response.is_success:
                    await response.aread()
                    self._handle_error(response)

                async for text in response.aiter_text():
                    if text:
                        yield text
        except httpx.TransportError as e:
            raise APIError(f"Stream failed: {e}") from e

    async def close(self) -> None:
        """Close the async HTTP client"""
        if self._http_client:
            await self._http_client.aclose()

    async def __aenter__(self):
        """Async context manager entry"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()
        return False
