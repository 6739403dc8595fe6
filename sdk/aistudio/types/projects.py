"""Type definitions for Projects API"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from .chat import ChatMessageResponse
from .files import FileResponse


class ProjectCreate(BaseModel):
    """Schema for creating a project"""

    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    github_repo_url: Optional[str] = Field(None, serialization_alias="githubRepoUrl")


class ProjectUpdate(BaseModel):
    """Schema for updating a project (all fields optional)"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    github_repo_url: Optional[str] = Field(None, serialization_alias="githubRepoUrl")


class ProjectResponse(BaseModel):
    """
    A project with its files and messages

    List entries carry only the latest message; detail responses carry
    the whole conversation.
    """

    id: UUID
    name: str
    description: Optional[str] = None
    github_repo_url: Optional[str] = Field(None, alias="githubRepoUrl")
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    files: List[FileResponse] = Field(default_factory=list)
    messages: List[ChatMessageResponse] = Field(default_factory=list)

    class Config:
        populate_by_name = True
