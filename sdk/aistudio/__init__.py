"""AI Studio SDK - Python client for the AI Studio API"""

from .async_client import AsyncClient
from .workspace import Workspace, Message
from .exceptions import (
    AIStudioError,
    AuthenticationError,
    CredentialMissingError,
    NotFoundError,
    ValidationError,
    RateLimitError,
    APIError,
)
from .version import __version__

__all__ = [
    "AsyncClient",
    "Workspace",
    "Message",
    "AIStudioError",
    "AuthenticationError",
    "CredentialMissingError",
    "NotFoundError",
    "ValidationError",
    "RateLimitError",
    "APIError",
    "__version__",
]
