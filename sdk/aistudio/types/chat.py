"""Type definitions for Chat API"""

from pydantic import BaseModel, Field
from typing import Literal, Optional
from datetime import datetime
from uuid import UUID


class ChatRequest(BaseModel):
    """Body of a chat turn"""

    project_id: UUID = Field(..., serialization_alias="projectId")
    message: str = Field(..., min_length=1)
    model: str = Field(..., min_length=1)
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, serialization_alias="maxTokens", ge=1)


class RegenerateRequest(BaseModel):
    """Body of a regeneration request"""

    project_id: UUID = Field(..., serialization_alias="projectId")
    message_id: UUID = Field(..., serialization_alias="messageId")
    model: str = Field(..., min_length=1)
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, serialization_alias="maxTokens", ge=1)


class ChatMessageCreate(BaseModel):
    """Append a message without generation"""

    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1)
    model: Optional[str] = None


class ChatMessageResponse(BaseModel):
    """A stored chat message"""

    id: UUID
    project_id: UUID = Field(..., alias="projectId")
    role: str
    content: str
    model: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")

    class Config:
        populate_by_name = True
