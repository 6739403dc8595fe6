"""Resource classes for AI Studio SDK"""

from .auth import AsyncAuthResource
from .projects import AsyncProjectsResource
from .files import AsyncFilesResource
from .chat import AsyncChatResource
from .models import AsyncModelsResource
from .api_keys import AsyncAPIKeysResource
from .github import AsyncGitHubResource

__all__ = [
    "AsyncAuthResource",
    "AsyncProjectsResource",
    "AsyncFilesResource",
    "AsyncChatResource",
    "AsyncModelsResource",
    "AsyncAPIKeysResource",
    "AsyncGitHubResource",
]
