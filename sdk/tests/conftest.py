"""Pytest configuration and fixtures"""

import pytest
from uuid import uuid4
from aistudio import AsyncClient


@pytest.fixture
def api_key():
    """Test access token"""
    return "sk_studio_test_token_123"


@pytest.fixture
def base_url():
    """Test base URL"""
    return "http://localhost:8000/api/v1"


@pytest.fixture
async def async_client(api_key, base_url):
    """Create test async client"""
    client = AsyncClient(api_key=api_key, base_url=base_url, max_retries=3)
    client._calculate_backoff = lambda attempt: 0
    yield client
    await client.close()


@pytest.fixture
def project_id():
    """Test project UUID as string"""
    return str(uuid4())


@pytest.fixture
def file_id():
    """Test file UUID as string"""
    return str(uuid4())


@pytest.fixture
def mock_file_response(file_id, project_id):
    """Mock file response data"""
    return {
        "id": file_id,
        "projectId": project_id,
        "path": "index.html",
        "content": "<h1>Hello</h1>",
        "language": "html",
        "createdAt": "2024-01-01T00:00:00",
        "updatedAt": "2024-01-01T00:00:00",
    }


@pytest.fixture
def mock_message_response(project_id):
    """Mock chat message response data"""
    return {
        "id": str(uuid4()),
        "projectId": project_id,
        "role": "user",
        "content": "Add a navbar",
        "model": "gpt-4o",
        "createdAt": "2024-01-01T00:00:01",
    }


@pytest.fixture
def mock_project_response(project_id, mock_file_response, mock_message_response):
    """Mock project detail response data"""
    return {
        "id": project_id,
        "name": "Landing page",
        "description": "Test description",
        "githubRepoUrl": None,
        "createdAt": "2024-01-01T00:00:00",
        "updatedAt": "2024-01-01T00:00:00",
        "files": [mock_file_response],
        "messages": [mock_message_response],
    }
