"""Files resource implementation"""

from typing import Optional, TYPE_CHECKING
from uuid import UUID

from ..types.files import FileCreate, FileUpdate, FileResponse

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncFilesResource:
    """Asynchronous Files resource"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def create(
        self,
        project_id: UUID,
        path: str,
        content: str = "",
        language: str = "text",
    ) -> FileResponse:
        """
        Create a file in a project.

        Raises:
            NotFoundError: Project not found
            ValidationError: A file with this path already exists
        """
        data = FileCreate(
            project_id=project_id,
            path=path,
            content=content,
            language=language,
        ).model_dump(mode="json", by_alias=True)

        response = await self._client.request("POST", "/files", json=data)
        return FileResponse(**response.json())

    async def get(self, file_id: UUID) -> FileResponse:
        response = await self._client.request("GET", f"/files/{file_id}")
        return FileResponse(**response.json())

    async def update(
        self,
        file_id: UUID,
        content: Optional[str] = None,
        language: Optional[str] = None,
    ) -> FileResponse:
        """Save file content and/or language"""
        data = FileUpdate(content=content, language=language).model_dump(exclude_none=True)
        response = await self._client.request("PUT", f"/files/{file_id}", json=data)
        return FileResponse(**response.json())

    async def delete(self, file_id: UUID) -> None:
        await self._client.request("DELETE", f"/files/{file_id}")
