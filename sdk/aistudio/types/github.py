"""Type definitions for GitHub API"""

from pydantic import BaseModel, Field
from typing import List, Optional

from .files import FileResponse


class GitHubRepository(BaseModel):
    name: str
    full_name: str = Field(..., alias="fullName")
    description: Optional[str] = None
    stars: int = 0
    url: str
    default_branch: str = Field(..., alias="defaultBranch")

    class Config:
        populate_by_name = True


class GitHubContent(BaseModel):
    """One entry of a directory listing"""

    name: str
    path: str
    type: str
    size: int = 0
    sha: str
    download_url: Optional[str] = Field(None, alias="downloadUrl")

    class Config:
        populate_by_name = True


class GitHubFile(BaseModel):
    path: str
    content: str


class GitHubImportResponse(BaseModel):
    imported: List[FileResponse] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
