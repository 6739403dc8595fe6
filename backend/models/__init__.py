"""
SQLAlchemy Database Models

All models use UUID as primary key for better distribution and security.
Timestamps are set in Python (UTC, microsecond precision) so message
ordering by creation time stays stable on every backend.

Models:
    - User: Identity of a signed-in user
    - AccessToken: Bearer tokens used to authenticate API calls
    - Project: User-owned container of files and a chat history
    - File: Editable source file inside a project
    - ChatMessage: Individual messages in a project's conversation
    - UserApiKey: Encrypted provider credential supplied by a user

Relationships:
    User 1:N AccessToken
    User 1:N Project
    User 1:N UserApiKey
    Project 1:N File
    Project 1:N ChatMessage

Cascade Deletes:
    - Delete User → Delete all AccessTokens, Projects, UserApiKeys
    - Delete Project → Delete all Files, ChatMessages
"""

from backend.models.user import User
from backend.models.access_token import AccessToken
from backend.models.project import Project
from backend.models.file import File
from backend.models.chat_message import ChatMessage
from backend.models.user_api_key import UserApiKey

__all__ = ["User", "AccessToken", "Project", "File", "ChatMessage", "UserApiKey"]
