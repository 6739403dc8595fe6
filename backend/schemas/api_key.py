"""
Pydantic Schemas for provider API-key endpoints
Key material is accepted, never returned
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import datetime

from backend.services.providers import Provider


class APIKeySave(BaseModel):
    """Upsert a user's key for one provider"""
    provider: Provider = Field(..., description="Provider id")
    api_key: str = Field(..., alias="apiKey", min_length=1, max_length=1000)

    @field_validator("api_key")
    @classmethod
    def key_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("API key cannot be empty")
        return v

    class Config:
        populate_by_name = True


class APIKeyDetail(BaseModel):
    """Which provider has a stored key, and since when"""
    provider: str
    created_at: datetime = Field(..., serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


class APIKeyListResponse(BaseModel):
    providers: List[str]
    details: List[APIKeyDetail]


class APIKeySaveResponse(BaseModel):
    success: bool = True
    provider: str
