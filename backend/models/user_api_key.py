"""
UserApiKey Model - encrypted provider credential supplied by a user
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from backend.database import Base, utcnow


class UserApiKey(Base):
    """
    Provider API key stored per (user, provider)

    Attributes:
        id: Row UUID
        user_id: Owner
        provider: Provider id ('openai', 'anthropic', 'google', 'x-ai', 'openrouter')
        encrypted_key: 'iv_hex:ciphertext_hex' produced by backend.core.crypto
        created_at: First save
        updated_at: Last upsert

    Relationships:
        user: Owner (many-to-one)

    Security:
        - Plaintext keys never touch the database
        - Key material is never returned by the API
    """

    __tablename__ = "user_api_keys"
    __table_args__ = (
        UniqueConstraint("user_id", "provider", name="uq_user_api_keys_user_provider"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    provider = Column(String(50), nullable=False)
    encrypted_key = Column(Text, nullable=False)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    user = relationship("User", back_populates="provider_keys")

    def __repr__(self):
        return f"<UserApiKey(id={self.id}, provider={self.provider}, user_id={self.user_id})>"
