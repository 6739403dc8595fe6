"""Projects resource implementation"""

from typing import List, Optional, TYPE_CHECKING
from uuid import UUID

from ..types.projects import ProjectCreate, ProjectUpdate, ProjectResponse
from ..types.chat import ChatMessageCreate, ChatMessageResponse

if TYPE_CHECKING:
    from ..async_client import AsyncClient


class AsyncProjectsResource:
    """Asynchronous Projects resource"""

    def __init__(self, client: "AsyncClient"):
        self._client = client

    async def list(self) -> List[ProjectResponse]:
        """
        List the user's projects, most recently updated first.

        A user without projects gets a starter project created on first
        listing. Each entry carries its files and only the latest message.
        """
        response = await self._client.request("GET", "/projects")
        return [ProjectResponse(**item) for item in response.json()]

    async def create(
        self,
        name: str,
        description: Optional[str] = None,
        github_repo_url: Optional[str] = None,
    ) -> ProjectResponse:
        """
        Create a new project.

        Args:
            name: Project name (required)
            description: Optional description
            github_repo_url: Repository the project is seeded from

        Returns:
            ProjectResponse: Created project (no files, no messages)

        Raises:
            ValidationError: Invalid name
        """
        data = ProjectCreate(
            name=name,
            description=description,
            github_repo_url=github_repo_url,
        ).model_dump(exclude_none=True, by_alias=True)

        response = await self._client.request("POST", "/projects", json=data)
        return ProjectResponse(**response.json())

    async def get(self, project_id: UUID) -> ProjectResponse:
        """
        Get a project with all of its files and messages.

        Raises:
            NotFoundError: Project not found (or owned by someone else)
        """
        response = await self._client.request("GET", f"/projects/{project_id}")
        return ProjectResponse(**response.json())

    async def update(
        self,
        project_id: UUID,
        name: Optional[str] = None,
        description: Optional[str] = None,
        github_repo_url: Optional[str] = None,
    ) -> ProjectResponse:
        """Update project metadata (only the given fields change)"""
        data = ProjectUpdate(
            name=name,
            description=description,
            github_repo_url=github_repo_url,
        ).model_dump(exclude_none=True, by_alias=True)

        response = await self._client.request("PATCH", f"/projects/{project_id}", json=data)
        return ProjectResponse(**response.json())

    async def delete(self, project_id: UUID) -> None:
        """Delete a project with its files and messages"""
        await self._client.request("DELETE", f"/projects/{project_id}")

    async def messages(self, project_id: UUID) -> List[ChatMessageResponse]:
        """Conversation of a project, oldest first"""
        response = await self._client.request("GET", f"/projects/{project_id}/messages")
        return [ChatMessageResponse(**item) for item in response.json()]

    async def add_message(
        self,
        project_id: UUID,
        role: str,
        content: str,
        model: Optional[str] = None,
    ) -> ChatMessageResponse:
        """Append a message to the conversation without generating a reply"""
        data = ChatMessageCreate(role=role, content=content, model=model).model_dump(exclude_none=True)
        response = await self._client.request("POST", f"/projects/{project_id}/messages", json=data)
        return ChatMessageResponse(**response.json())
