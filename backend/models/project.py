"""
Project Model - user-owned container of files and a chat history
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import relationship
import uuid

from backend.database import Base, utcnow


class Project(Base):
    """
    Project model - groups files and one conversation

    Attributes:
        id: Project UUID
        user_id: Owner
        name: Project name
        description: Optional description
        github_repo_url: Optional repository the project was seeded from
        created_at: Creation timestamp
        updated_at: Bumped on edits and on every file save

    Relationships:
        user: Owner (many-to-one)
        files: Project files (one-to-many)
        messages: Chat history (one-to-many)

    Cascade Delete:
        - Deleting a project deletes all its files and messages
    """

    __tablename__ = "projects"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    description = Column(Text)
    github_repo_url = Column(String(1024))

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True)

    # Relationships
    user = relationship("User", back_populates="projects")
    files = relationship(
        "File",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="File.path"
    )
    messages = relationship(
        "ChatMessage",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ChatMessage.created_at"
    )

    def __repr__(self):
        return f"<Project(id={self.id}, name={self.name}, user_id={self.user_id})>"
