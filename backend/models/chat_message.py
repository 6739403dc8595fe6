"""
ChatMessage Model - Individual messages in a project's conversation
"""

from sqlalchemy import Column, String, Text, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import relationship
import uuid

from backend.database import Base, utcnow


class ChatMessage(Base):
    """
    Chat message model - individual messages in conversation

    Attributes:
        id: Message UUID
        project_id: Parent project
        role: Message role ('user' or 'assistant')
        content: Message text
        model: Registry id of the model used for the turn (optional)
        created_at: Message timestamp, the only ordering key

    Relationships:
        project: Parent project (many-to-one)

    Messages are never edited. Regeneration deletes the tail of the
    conversation and writes new rows.
    """

    __tablename__ = "chat_messages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)

    role = Column(String(20), nullable=False)  # user, assistant
    content = Column(Text, nullable=False)
    model = Column(String(100))

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    # Relationships
    project = relationship("Project", back_populates="messages")

    def __repr__(self):
        return f"<ChatMessage(id={self.id}, role={self.role}, project_id={self.project_id})>"
