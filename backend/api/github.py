"""
GitHub API endpoints
Read-only browsing of public repositories and import into projects
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from backend.config import settings
from backend.database import get_db, utcnow
from backend.core.exceptions import GitHubError, http_404_not_found
from backend.api.deps import AuthenticatedRoute, get_current_user, get_github_service
from backend.models.user import User
from backend.models.project import Project
from backend.models.file import File
from backend.schemas.file import FileResponse
from backend.schemas.github import (
    GitHubRepoRequest,
    GitHubContentsRequest,
    GitHubFileRequest,
    GitHubFileResponse,
    GitHubImportRequest,
    GitHubImportResponse,
)
from backend.services.github_service import (
    GitHubContent,
    GitHubRepository,
    GitHubService,
    is_text_file,
    language_for,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/github", tags=["github"], route_class=AuthenticatedRoute)


@router.post("/repo", response_model=GitHubRepository)
async def get_repository(
    body: GitHubRepoRequest,
    current_user: User = Depends(get_current_user),
    github: GitHubService = Depends(get_github_service)
):
    """Repository metadata for a GitHub URL"""
    return await github.get_repository(body.url)


@router.post("/contents", response_model=List[GitHubContent])
async def list_contents(
    body: GitHubContentsRequest,
    current_user: User = Depends(get_current_user),
    github: GitHubService = Depends(get_github_service)
):
    """Directory listing at a path (repository root by default)"""
    return await github.list_contents(body.url, body.path)


@router.post("/file", response_model=GitHubFileResponse)
async def get_file(
    body: GitHubFileRequest,
    current_user: User = Depends(get_current_user),
    github: GitHubService = Depends(get_github_service)
):
    """Decoded text of a single file"""
    content = await github.get_file_content(body.url, body.path)
    return GitHubFileResponse(path=body.path, content=content)


@router.post("/import", response_model=GitHubImportResponse)
async def import_files(
    body: GitHubImportRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    github: GitHubService = Depends(get_github_service)
):
    """
    Copy text files at a repository path into a project

    Only the first GITHUB_IMPORT_LIMIT text files are imported. Files are
    named after the entry name; an existing file with that path is
    overwritten.

    Raises:
        HTTPException: 404 if project not found
    """
    project = db.query(Project).filter(
        Project.id == body.project_id,
        Project.user_id == current_user.id
    ).first()

    if not project:
        raise http_404_not_found("Project not found")

    entries = await github.list_contents(body.url, body.path)
    candidates = [e for e in entries if e.type == "file" and is_text_file(e.name)]
    candidates = candidates[:settings.GITHUB_IMPORT_LIMIT]

    imported: List[File] = []
    skipped: List[str] = []

    for entry in candidates:
        try:
            content = await github.get_file_content(body.url, entry.path)
        except GitHubError as e:
            logger.warning(f"Skipping {entry.path}: {e.message}")
            skipped.append(entry.path)
            continue

        db_file = db.query(File).filter(
            File.project_id == project.id,
            File.path == entry.name
        ).first()

        if db_file:
            db_file.content = content
            db_file.language = language_for(entry.name)
        else:
            db_file = File(
                project_id=project.id,
                path=entry.name,
                content=content,
                language=language_for(entry.name)
            )
            db.add(db_file)

        imported.append(db_file)

    if not project.github_repo_url:
        project.github_repo_url = body.url
    project.updated_at = utcnow()
    db.commit()

    for db_file in imported:
        db.refresh(db_file)

    logger.info(f"Imported {len(imported)} files into project {project.id}")

    return GitHubImportResponse(
        imported=[FileResponse.model_validate(f) for f in imported],
        skipped=skipped
    )
