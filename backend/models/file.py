"""
File Model - editable source file inside a project
"""

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Uuid, UniqueConstraint
from sqlalchemy.orm import relationship
import uuid

from backend.database import Base, utcnow


class File(Base):
    """
    File model - one editor buffer persisted per project

    Attributes:
        id: File UUID
        project_id: Parent project
        path: Path inside the project (unique per project, otherwise free-form)
        content: Text content
        language: Editor/preview hint (e.g. 'javascript', 'css', 'text')
        created_at: Creation timestamp (insertion order for chat context)
        updated_at: Last save timestamp

    Relationships:
        project: Parent project (many-to-one)
    """

    __tablename__ = "files"
    __table_args__ = (
        UniqueConstraint("project_id", "path", name="uq_files_project_path"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)

    path = Column(String(1024), nullable=False)
    content = Column(Text, nullable=False, default="")
    language = Column(String(50), nullable=False, default="text")

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    project = relationship("Project", back_populates="files")

    def __repr__(self):
        return f"<File(id={self.id}, path={self.path}, project_id={self.project_id})>"
