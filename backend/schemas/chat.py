"""
Pydantic Schemas for Chat endpoints
Request/Response validation for the streaming chat relay
"""

from pydantic import BaseModel, Field, field_validator
from typing import Literal, Optional
from datetime import datetime
from uuid import UUID


class ChatRequest(BaseModel):
    """
    Chat request body

    Field names follow the browser client (camelCase); snake_case is
    accepted as well.
    """
    project_id: UUID = Field(..., alias="projectId", description="Project the conversation belongs to")
    message: str = Field(..., min_length=1, max_length=100_000, description="User message")
    model: str = Field(
        ...,
        min_length=1,
        description="Registry model id (e.g. 'gpt-4o', 'claude-3.5-sonnet')"
    )
    temperature: Optional[float] = Field(
        None,
        ge=0.0,
        le=2.0,
        description="Temperature override (0.0-2.0)"
    )
    max_tokens: Optional[int] = Field(
        None,
        alias="maxTokens",
        ge=1,
        description="Max output tokens override"
    )

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "projectId": "550e8400-e29b-41d4-a716-446655440000",
                "message": "Create a landing page with a hero section",
                "model": "gpt-4o",
                "temperature": 0.7
            }
        }


class RegenerateRequest(BaseModel):
    """Re-run generation for an earlier user turn"""
    project_id: UUID = Field(..., alias="projectId")
    message_id: UUID = Field(..., alias="messageId", description="User message to answer again")
    model: str = Field(..., min_length=1)
    temperature: Optional[float] = Field(None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(None, alias="maxTokens", ge=1)

    class Config:
        populate_by_name = True


class ChatMessageCreate(BaseModel):
    """Append a message to a project's conversation without generation"""
    role: Literal["user", "assistant"] = Field(..., description="Message role")
    content: str = Field(..., min_length=1)
    model: Optional[str] = Field(None, max_length=100)


class ChatMessageResponse(BaseModel):
    """Chat message response"""
    id: UUID
    project_id: UUID = Field(..., serialization_alias="projectId")
    role: str
    content: str
    model: Optional[str] = None
    created_at: datetime = Field(..., serialization_alias="createdAt")

    class Config:
        from_attributes = True
