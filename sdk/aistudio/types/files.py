"""Type definitions for Files API"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID


class FileCreate(BaseModel):
    """Schema for creating a file"""

    project_id: UUID = Field(..., serialization_alias="projectId")
    path: str = Field(..., min_length=1, max_length=1024)
    content: str = ""
    language: str = "text"


class FileUpdate(BaseModel):
    """Schema for saving a file (all fields optional)"""

    content: Optional[str] = None
    language: Optional[str] = None


class FileResponse(BaseModel):
    """A project file"""

    id: UUID
    project_id: UUID = Field(..., alias="projectId")
    path: str
    content: str = ""
    language: str = "text"
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    class Config:
        populate_by_name = True
