"""Provider API-key resource implementation"""

from typing import TYPE_CHECKING

from ..types.api_keys import APIKeyListResponse

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncAPIKeysResource:
    """Asynchronous resource for the user's own provider keys"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def save(self, provider: str, api_key: str) -> None:
        """
        Store (or replace) the key for a provider.

        The key is encrypted server-side and never returned.

        Raises:
            ValidationError: Unknown provider or blank key
        """
        await self._client.request(
            "POST",
            "/user/api-keys",
            json={"provider": provider, "apiKey": api_key},
        )

    async def list(self) -> APIKeyListResponse:
        """Providers for which a key is stored"""
        response = await self._client.request("GET", "/user/api-keys")
        return APIKeyListResponse(**response.json())

    async def delete(self, provider: str) -> None:
        """
        Remove the key for a provider.

        Raises:
            NotFoundError: No key stored for the provider
        """
        await self._client.request("DELETE", "/user/api-keys", params={"provider": provider})
