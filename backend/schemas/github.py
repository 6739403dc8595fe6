"""
Pydantic Schemas for GitHub endpoints
"""

from pydantic import BaseModel, Field
from typing import List
from uuid import UUID

from backend.schemas.file import FileResponse


class GitHubRepoRequest(BaseModel):
    url: str = Field(..., min_length=1, description="https://github.com/{owner}/{repo}")


class GitHubContentsRequest(GitHubRepoRequest):
    path: str = Field(default="", description="Directory path (repository root by default)")


class GitHubFileRequest(GitHubRepoRequest):
    path: str = Field(..., min_length=1, description="File path")


class GitHubFileResponse(BaseModel):
    path: str
    content: str


class GitHubImportRequest(GitHubContentsRequest):
    """Copy the text files at a path into a project"""
    project_id: UUID = Field(..., alias="projectId")

    class Config:
        populate_by_name = True


class GitHubImportResponse(BaseModel):
    imported: List[FileResponse]
    skipped: List[str] = Field(default_factory=list, description="Paths that could not be fetched")
