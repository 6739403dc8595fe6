"""Type definitions for AI Studio SDK"""

from .auth import RegisterRequest, RegisterResponse, UserResponse
from .files import FileCreate, FileUpdate, FileResponse
from .chat import ChatRequest, RegenerateRequest, ChatMessageCreate, ChatMessageResponse
from .projects import ProjectCreate, ProjectUpdate, ProjectResponse
from .api_keys import APIKeyDetail, APIKeyListResponse
from .github import GitHubRepository, GitHubContent, GitHubFile, GitHubImportResponse
from .models import Pricing, ModelInfo, ModelCatalog, ModelList

__all__ = [
    "RegisterRequest",
    "RegisterResponse",
    "UserResponse",
    "FileCreate",
    "FileUpdate",
    "FileResponse",
    "ChatRequest",
    "RegenerateRequest",
    "ChatMessageCreate",
    "ChatMessageResponse",
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "APIKeyDetail",
    "APIKeyListResponse",
    "GitHubRepository",
    "GitHubContent",
    "GitHubFile",
    "GitHubImportResponse",
    "Pricing",
    "ModelInfo",
    "ModelCatalog",
    "ModelList",
]
