"""
Project API endpoints
CRUD for projects plus their conversation messages
"""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session, selectinload
from typing import List
from uuid import UUID

from backend.database import get_db
from backend.core.exceptions import http_404_not_found
from backend.api.deps import AuthenticatedRoute, get_current_user
from backend.models.user import User
from backend.models.project import Project
from backend.models.chat_message import ChatMessage
from backend.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectSummaryResponse,
    ProjectDetailResponse,
)
from backend.schemas.chat import ChatMessageCreate, ChatMessageResponse
from backend.schemas.file import FileResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/projects", tags=["projects"], route_class=AuthenticatedRoute)

WELCOME_PROJECT_NAME = "Welcome Chat"
WELCOME_PROJECT_DESCRIPTION = "Your first AI conversation"


def get_owned_project(db: Session, project_id: UUID, user: User) -> Project:
    """
    Fetch a project owned by the user

    Raises:
        HTTPException: 404 if missing or owned by someone else
    """
    project = db.query(Project).filter(
        Project.id == project_id,
        Project.user_id == user.id
    ).first()

    if not project:
        raise http_404_not_found("Project not found")

    return project


def _summary(db: Session, project: Project) -> ProjectSummaryResponse:
    latest = db.query(ChatMessage).filter(
        ChatMessage.project_id == project.id
    ).order_by(ChatMessage.created_at.desc()).first()

    return ProjectSummaryResponse(
        id=project.id,
        name=project.name,
        description=project.description,
        github_repo_url=project.github_repo_url,
        created_at=project.created_at,
        updated_at=project.updated_at,
        files=[FileResponse.model_validate(f) for f in project.files],
        messages=[ChatMessageResponse.model_validate(latest)] if latest else []
    )


@router.get("", response_model=List[ProjectSummaryResponse])
async def list_projects(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    List the user's projects, most recently updated first

    A user without any project gets a welcome project created on the fly.

    Returns:
        Projects with their files and latest message
    """
    projects = db.query(Project).options(
        selectinload(Project.files)
    ).filter(
        Project.user_id == current_user.id
    ).order_by(Project.updated_at.desc(), Project.created_at.desc()).all()

    if not projects:
        welcome = Project(
            user_id=current_user.id,
            name=WELCOME_PROJECT_NAME,
            description=WELCOME_PROJECT_DESCRIPTION
        )
        db.add(welcome)
        db.commit()
        db.refresh(welcome)
        logger.info(f"Created welcome project for user {current_user.id}")
        projects = [welcome]

    return [_summary(db, p) for p in projects]


@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Create a new project

    Args:
        project: Name, optional description and repository URL
        db: Database session
        current_user: Authenticated user

    Returns:
        ProjectResponse: Created project
    """
    db_project = Project(
        user_id=current_user.id,
        name=project.name,
        description=project.description,
        github_repo_url=project.github_repo_url
    )

    db.add(db_project)
    db.commit()
    db.refresh(db_project)

    return db_project


@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get project by ID with files (by path) and messages (by time)

    Raises:
        HTTPException: 404 if project not found or not owned by user
    """
    return get_owned_project(db, project_id, current_user)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    project_update: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Update project metadata

    Args:
        project_id: Project UUID
        project_update: Fields to update (all optional)
        db: Database session
        current_user: Authenticated user

    Returns:
        ProjectResponse: Updated project

    Raises:
        HTTPException: 404 if project not found
    """
    project = get_owned_project(db, project_id, current_user)

    update_data = project_update.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(project, field, value)

    db.commit()
    db.refresh(project)

    return project


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Delete project with all its files and messages (cascade delete)

    Raises:
        HTTPException: 404 if project not found
    """
    project = get_owned_project(db, project_id, current_user)

    db.delete(project)
    db.commit()

    return None


@router.get("/{project_id}/messages", response_model=List[ChatMessageResponse])
async def list_messages(
    project_id: UUID,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get a project's conversation in chronological order

    Raises:
        HTTPException: 404 if project not found or not owned by user
    """
    project = get_owned_project(db, project_id, current_user)

    return db.query(ChatMessage).filter(
        ChatMessage.project_id == project.id
    ).order_by(ChatMessage.created_at.asc()).all()


@router.post(
    "/{project_id}/messages",
    response_model=ChatMessageResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_message(
    project_id: UUID,
    message: ChatMessageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Append a message without running generation

    Raises:
        HTTPException: 404 if project not found or not owned by user
    """
    project = get_owned_project(db, project_id, current_user)

    db_message = ChatMessage(
        project_id=project.id,
        role=message.role,
        content=message.content,
        model=message.model
    )
    db.add(db_message)
    db.commit()
    db.refresh(db_message)

    return db_message
