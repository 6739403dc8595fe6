"""
Pydantic Schemas for Project endpoints
Request/Response validation
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID

from backend.schemas.chat import ChatMessageResponse
from backend.schemas.file import FileResponse


class ProjectBase(BaseModel):
    """Base schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Project name")
    description: Optional[str] = Field(None, max_length=5000, description="Optional description")
    github_repo_url: Optional[str] = Field(
        None,
        alias="githubRepoUrl",
        max_length=1024,
        description="Repository the project was seeded from"
    )

    class Config:
        populate_by_name = True


class ProjectCreate(ProjectBase):
    """Schema for creating a project"""
    pass


class ProjectUpdate(BaseModel):
    """Schema for updating a project (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    github_repo_url: Optional[str] = Field(None, alias="githubRepoUrl", max_length=1024)

    class Config:
        populate_by_name = True


class ProjectResponse(BaseModel):
    """Project without children"""
    id: UUID
    name: str
    description: Optional[str] = None
    github_repo_url: Optional[str] = Field(None, serialization_alias="githubRepoUrl")
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


class ProjectSummaryResponse(ProjectResponse):
    """List entry: files plus the latest message"""
    files: List[FileResponse] = Field(default_factory=list)
    messages: List[ChatMessageResponse] = Field(default_factory=list)


class ProjectDetailResponse(ProjectResponse):
    """Full project: files by path, messages by time"""
    files: List[FileResponse] = Field(default_factory=list)
    messages: List[ChatMessageResponse] = Field(default_factory=list)
