"""
Pydantic Schemas for Request/Response Validation

Project Schemas:
    - ProjectCreate: POST /projects
    - ProjectUpdate: PATCH /projects/{id}
    - ProjectSummaryResponse: List entry
    - ProjectDetailResponse: Single project with files and messages

File Schemas:
    - FileCreate: POST /files
    - FileUpdate: PUT /files/{id}
    - FileResponse: Single file response

Chat Schemas:
    - ChatRequest: POST /chat
    - RegenerateRequest: POST /chat/regenerate
    - ChatMessageCreate / ChatMessageResponse: conversation messages

API Key Schemas:
    - APIKeySave: POST /user/api-keys
    - APIKeyListResponse: GET /user/api-keys
"""

from backend.schemas.file import FileCreate, FileUpdate, FileResponse
from backend.schemas.chat import (
    ChatRequest,
    RegenerateRequest,
    ChatMessageCreate,
    ChatMessageResponse,
)
from backend.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectSummaryResponse,
    ProjectDetailResponse,
)
from backend.schemas.api_key import APIKeySave, APIKeyDetail, APIKeyListResponse, APIKeySaveResponse

__all__ = [
    # File schemas
    "FileCreate",
    "FileUpdate",
    "FileResponse",
    # Chat schemas
    "ChatRequest",
    "RegenerateRequest",
    "ChatMessageCreate",
    "ChatMessageResponse",
    # Project schemas
    "ProjectCreate",
    "ProjectUpdate",
    "ProjectResponse",
    "ProjectSummaryResponse",
    "ProjectDetailResponse",
    # API key schemas
    "APIKeySave",
    "APIKeyDetail",
    "APIKeyListResponse",
    "APIKeySaveResponse",
]
