"""Auth resource implementation"""

from typing import Optional, TYPE_CHECKING

from ..types.auth import RegisterRequest, RegisterResponse, UserResponse

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncAuthResource:
    """Asynchronous Auth resource"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def register(self, email: str, name: Optional[str] = None) -> RegisterResponse:
        """
        Register a new user and receive an access token.

        **IMPORTANT**: The token is only returned once. Save it securely!

        Args:
            email: User email address
            name: Optional display name

        Returns:
            RegisterResponse: User ID, email, and access token

        Raises:
            ValidationError: Invalid email or email already registered

        Example:
            >>> # Registration does not need a valid token
            >>> client = AsyncClient(api_key="not_needed_for_register")
            >>> response = await client.auth.register(email="user@example.com")
            >>> client = AsyncClient(api_key=response.access_token)
        """
        data = RegisterRequest(email=email, name=name).model_dump(exclude_none=True)

        # Don't use authentication for registration endpoint
        response = await self._client._http_client.post(
            f"{self._client.base_url}/auth/register",
            json=data,
            timeout=self._client.timeout,
        )

        self._client._handle_error(response)

        return RegisterResponse(**response.json())

    async def me(self) -> UserResponse:
        """The user the client's token belongs to"""
        response = await self._client.request("GET", "/auth/me")
        return UserResponse(**response.json())
