"""
Access Token Model - bearer tokens for API authentication
"""

from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid

from backend.database import Base, utcnow


class AccessToken(Base):
    """
    Access token model for bearer authentication

    Attributes:
        id: Unique token identifier (UUID)
        user_id: Foreign key to users table
        token_hash: SHA-256 hash of the token (for verification)
        token_prefix: First characters of the token (for identification)
        name: Human-readable name for the token
        is_active: Revoked tokens stay in the table with is_active=False
        last_used_at: Last time token was used for authentication
        created_at: Token creation timestamp

    Relationships:
        user: Owner of this token (many-to-one)

    Security:
        - Token is hashed with SHA-256 before storage
        - Original token is only shown once upon creation
    """

    __tablename__ = "access_tokens"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    token_hash = Column(String(255), unique=True, nullable=False, index=True)
    token_prefix = Column(String(24), nullable=False)
    name = Column(String(255))
    is_active = Column(Boolean, default=True)

    last_used_at = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    user = relationship("User", back_populates="access_tokens")

    def __repr__(self):
        return f"<AccessToken(id={self.id}, prefix={self.token_prefix}, user_id={self.user_id})>"
