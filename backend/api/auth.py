"""
Authentication API endpoints
Dev-mode user registration issuing bearer tokens
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
import logging

from backend.database import get_db
from backend.models.user import User
from backend.models.access_token import AccessToken
from backend.core.security import generate_access_token
from backend.core.exceptions import http_400_bad_request
from backend.api.deps import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


class RegisterRequest(BaseModel):
    """Request schema for user registration"""
    email: EmailStr = Field(..., description="User email address")
    name: Optional[str] = Field(None, max_length=255, description="Display name")


class RegisterResponse(BaseModel):
    """Response schema for user registration"""
    user_id: str
    email: str
    access_token: str = Field(..., description="Bearer token (save this - only shown once!)")


class UserResponse(BaseModel):
    """Current user"""
    id: str
    email: str
    name: Optional[str] = None


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    db: Session = Depends(get_db)
):
    """
    Register a new user and issue an access token

    **Important**: The token is only returned once. Save it securely!

    Raises:
        HTTPException: 400 if email already registered
    """
    existing_user = db.query(User).filter(User.email == request.email).first()

    if existing_user:
        raise http_400_bad_request(f"Email '{request.email}' is already registered")

    user = User(email=request.email, name=request.name, is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)

    token, token_hash = generate_access_token()

    db.add(AccessToken(
        user_id=user.id,
        token_hash=token_hash,
        token_prefix=token[:15],  # Store prefix for identification
        name="Default token"
    ))
    db.commit()

    logger.info(f"Registered user {user.id}")

    return RegisterResponse(
        user_id=str(user.id),
        email=user.email,
        access_token=token  # Only returned once!
    )


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(get_current_user)):
    """Return the authenticated user"""
    return UserResponse(id=str(current_user.id), email=current_user.email, name=current_user.name)
