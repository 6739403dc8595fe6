"""Models resource implementation"""

from typing import Optional, TYPE_CHECKING

from ..types.models import ModelCatalog, ModelList

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncModelsResource:
    """Asynchronous model catalog resource"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def list(self) -> ModelCatalog:
        """Full catalog with the providers usable by this user"""
        response = await self._client.request("GET", "/models")
        return ModelCatalog(**response.json())

    async def filter(
        self,
        provider: Optional[str] = None,
        capability: Optional[str] = None,
        category: Optional[str] = None,
    ) -> ModelList:
        """
        Slice of the catalog.

        Only one filter is applied, checked in the order provider,
        capability, category.

        Raises:
            ValidationError: Unknown filter value
        """
        params = {
            key: value
            for key, value in (("provider", provider), ("capability", capability), ("category", category))
            if value
        }
        response = await self._client.request("GET", "/models", params=params)
        return ModelList(**response.json())
