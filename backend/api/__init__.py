"""
API Routes and Endpoints

Routers:
    - auth: Registration and current user
    - projects: Project CRUD and conversation messages
    - files: File CRUD (ownership through the parent project)
    - chat: Streaming chat relay and regeneration
    - models: Model catalog
    - api_keys: User-supplied provider keys
    - github: Read-only GitHub browsing and import
"""

from backend.api import auth, projects, files, chat, models, api_keys, github

__all__ = ["auth", "projects", "files", "chat", "models", "api_keys", "github"]
