"""Type definitions for Auth API"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class RegisterRequest(BaseModel):
    """Schema for user registration"""

    email: EmailStr = Field(..., description="User email address")
    name: Optional[str] = Field(None, max_length=255, description="Display name")


class RegisterResponse(BaseModel):
    """Schema for registration response"""

    user_id: str
    email: str
    access_token: str = Field(..., description="Bearer token (only shown once)")


class UserResponse(BaseModel):
    """Authenticated user"""

    id: str
    email: str
    name: Optional[str] = None
