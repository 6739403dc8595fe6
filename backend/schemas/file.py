"""
Pydantic Schemas for File endpoints
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID


class FileCreate(BaseModel):
    """Schema for creating a file"""
    project_id: UUID = Field(..., alias="projectId", description="Parent project")
    path: str = Field(..., min_length=1, max_length=1024, description="Path inside the project")
    content: str = Field(default="", description="Initial content")
    language: str = Field(default="text", max_length=50, description="Editor language hint")

    class Config:
        populate_by_name = True


class FileUpdate(BaseModel):
    """Schema for saving a file (all fields optional)"""
    content: Optional[str] = None
    language: Optional[str] = Field(None, max_length=50)


class FileResponse(BaseModel):
    """Schema for file responses"""
    id: UUID
    project_id: UUID = Field(..., serialization_alias="projectId")
    path: str
    content: str
    language: str
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True
