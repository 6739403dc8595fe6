"""Type definitions for provider API-key endpoints"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class APIKeyDetail(BaseModel):
    """Which provider has a stored key, and since when"""

    provider: str
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    class Config:
        populate_by_name = True


class APIKeyListResponse(BaseModel):
    providers: List[str] = Field(default_factory=list)
    details: List[APIKeyDetail] = Field(default_factory=list)
