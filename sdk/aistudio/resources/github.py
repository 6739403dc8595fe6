"""GitHub resource implementation"""

from typing import List, TYPE_CHECKING
from uuid import UUID

from ..types.github import GitHubRepository, GitHubContent, GitHubFile, GitHubImportResponse

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncGitHubResource:
    """Asynchronous resource for reading public repositories"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def repository(self, url: str) -> GitHubRepository:
        response = await self._client.request("POST", "/github/repo", json={"url": url})
        return GitHubRepository(**response.json())

    async def contents(self, url: str, path: str = "") -> List[GitHubContent]:
        """Directory listing at a path (repository root by default)"""
        response = await self._client.request("POST", "/github/contents", json={"url": url, "path": path})
        return [GitHubContent(**item) for item in response.json()]

    async def file(self, url: str, path: str) -> GitHubFile:
        response = await self._client.request("POST", "/github/file", json={"url": url, "path": path})
        return GitHubFile(**response.json())

    async def import_files(self, url: str, project_id: UUID, path: str = "") -> GitHubImportResponse:
        """
        Copy the text files at a path into a project.

        Existing files with the same path are overwritten.
        """
        response = await self._client.request(
            "POST",
            "/github/import",
            json={"url": url, "path": path, "projectId": str(project_id)},
        )
        return GitHubImportResponse(**response.json())
