"""
User Model - Identity of a signed-in user
"""

from sqlalchemy import Column, String, Boolean, DateTime, Uuid
from sqlalchemy.orm import relationship
import uuid

from backend.database import Base, utcnow


class User(Base):
    """
    User model owning projects, access tokens and provider keys

    Attributes:
        id: Unique user identifier (UUID)
        email: User email (unique, indexed for fast lookup)
        name: Display name
        is_active: Whether user can authenticate
        created_at: Account creation timestamp
        updated_at: Last modification timestamp

    Relationships:
        access_tokens: User's bearer tokens (one-to-many)
        projects: User's projects (one-to-many)
        provider_keys: User's encrypted provider credentials (one-to-many)
    """

    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), onupdate=utcnow)

    # Relationships
    access_tokens = relationship("AccessToken", back_populates="user", cascade="all, delete-orphan")
    projects = relationship("Project", back_populates="user", cascade="all, delete-orphan")
    provider_keys = relationship("UserApiKey", back_populates="user", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
