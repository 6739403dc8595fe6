"""
File API endpoints
Every access resolves the parent project and checks ownership
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from uuid import UUID

from backend.database import get_db, utcnow
from backend.core.exceptions import http_400_bad_request, http_404_not_found
from backend.api.deps import AuthenticatedRoute, get_current_user
from backend.models.user import User
from backend.models.project import Project
from backend.models.file import File
from backend.schemas.file import FileCreate, FileUpdate, FileResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/files", tags=["files"], route_class=AuthenticatedRoute)


def get_owned_file(db: Session, file_id: UUID, user: User) -> File:
    """
    Fetch a file whose project belongs to the user

    Raises:
        HTTPException: 404 if missing or owned by someone else
    """
    file = db.query(File).join(Project, File.project_id == Project.id).filter(
        File.id == file_id,
        Project.user_id == user.id
    ).first()

    if not file:
        raise http_404_not_found("File not found")

    return file


@router.post("", response_model=FileResponse, status_code=status.HTTP_201_CREATED)
async def create_file(
    file: FileCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Create a file in a project

    Raises:
        HTTPException: 404 if project not found
        HTTPException: 400 if the path already exists in the project
    """
    project = db.query(Project).filter(
        Project.id == file.project_id,
        Project.user_id == current_user.id
    ).first()

    if not project:
        raise http_404_not_found("Project not found")

    existing = db.query(File).filter(
        File.project_id == project.id,
        File.path == file.path
    ).first()

    if existing:
        raise http_400_bad_request(f"File '{file.path}' already exists")

    db_file = File(
        project_id=project.id,
        path=file.path,
        content=file.content,
        language=file.language
    )
    db.add(db_file)
    project.updated_at = utcnow()
    db.commit()
    db.refresh(db_file)

    return db_file


@router.get("/{file_id}", response_model=FileResponse)
async def get_file(
    file_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a single file"""
    return get_owned_file(db, file_id, current_user)


@router.put("/{file_id}", response_model=FileResponse)
async def update_file(
    file_id: UUID,
    file_update: FileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Save file content and/or language (editor auto-save)

    Also bumps the parent project's updated_at so it sorts first.

    Raises:
        HTTPException: 404 if file not found
    """
    db_file = get_owned_file(db, file_id, current_user)

    update_data = file_update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(db_file, field, value)

    db_file.project.updated_at = utcnow()
    db.commit()
    db.refresh(db_file)

    return db_file


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(
    file_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Delete a file

    Raises:
        HTTPException: 404 if file not found
    """
    db_file = get_owned_file(db, file_id, current_user)

    db.delete(db_file)
    db.commit()

    return None
