"""Unit tests for the API resources"""

import json

import pytest
from pytest_httpx import HTTPXMock

from aistudio.types import (
    APIKeyListResponse,
    FileResponse,
    GitHubImportResponse,
    ModelCatalog,
    ProjectResponse,
)

BASE = "http://localhost:8000/api/v1"


@pytest.mark.asyncio
async def test_register_without_authorization(async_client, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE}/auth/register",
        status_code=201,
        json={"user_id": "u1", "email": "dev@example.com", "access_token": "sk_studio_abc"},
    )

    result = await async_client.auth.register(email="dev@example.com", name="Dev")

    assert result.access_token == "sk_studio_abc"
    request = httpx_mock.get_request()
    assert "Authorization" not in request.headers
    assert json.loads(request.content) == {"email": "dev@example.com", "name": "Dev"}


@pytest.mark.asyncio
async def test_list_projects(async_client, httpx_mock: HTTPXMock, mock_project_response):
    httpx_mock.add_response(method="GET", url=f"{BASE}/projects", json=[mock_project_response])

    projects = await async_client.projects.list()

    assert len(projects) == 1
    assert isinstance(projects[0], ProjectResponse)
    assert projects[0].files[0].path == "index.html"
    assert projects[0].messages[0].role == "user"


@pytest.mark.asyncio
async def test_create_project_sends_camel_case(async_client, httpx_mock: HTTPXMock, mock_project_response):
    mock_project_response["githubRepoUrl"] = "https://github.com/octocat/Hello-World"
    httpx_mock.add_response(method="POST", url=f"{BASE}/projects", status_code=201, json=mock_project_response)

    project = await async_client.projects.create(
        name="Landing page",
        github_repo_url="https://github.com/octocat/Hello-World",
    )

    assert project.github_repo_url == "https://github.com/octocat/Hello-World"
    assert json.loads(httpx_mock.get_request().content) == {
        "name": "Landing page",
        "githubRepoUrl": "https://github.com/octocat/Hello-World",
    }


@pytest.mark.asyncio
async def test_delete_project(async_client, httpx_mock: HTTPXMock, project_id):
    httpx_mock.add_response(method="DELETE", url=f"{BASE}/projects/{project_id}", status_code=204)

    await async_client.projects.delete(project_id)

    assert httpx_mock.get_request().method == "DELETE"


@pytest.mark.asyncio
async def test_create_file(async_client, httpx_mock: HTTPXMock, project_id, mock_file_response):
    httpx_mock.add_response(method="POST", url=f"{BASE}/files", status_code=201, json=mock_file_response)

    created = await async_client.files.create(project_id, "index.html", "<h1>Hello</h1>", language="html")

    assert isinstance(created, FileResponse)
    assert json.loads(httpx_mock.get_request().content) == {
        "projectId": project_id,
        "path": "index.html",
        "content": "<h1>Hello</h1>",
        "language": "html",
    }


@pytest.mark.asyncio
async def test_update_file_sends_only_given_fields(async_client, httpx_mock: HTTPXMock, file_id, mock_file_response):
    mock_file_response["content"] = "x"
    httpx_mock.add_response(method="PUT", url=f"{BASE}/files/{file_id}", json=mock_file_response)

    saved = await async_client.files.update(file_id, content="x")

    assert saved.content == "x"
    assert json.loads(httpx_mock.get_request().content) == {"content": "x"}


@pytest.mark.asyncio
async def test_api_keys_roundtrip(async_client, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE}/user/api-keys",
        json={"success": True, "provider": "openai"},
    )
    httpx_mock.add_response(
        method="GET",
        url=f"{BASE}/user/api-keys",
        json={
            "providers": ["openai"],
            "details": [{"provider": "openai", "createdAt": "2024-01-01T00:00:00", "updatedAt": None}],
        },
    )
    httpx_mock.add_response(
        method="DELETE",
        url=f"{BASE}/user/api-keys?provider=openai",
        json={"success": True},
    )

    await async_client.api_keys.save("openai", "sk-test")
    listing = await async_client.api_keys.list()
    await async_client.api_keys.delete("openai")

    assert isinstance(listing, APIKeyListResponse)
    assert listing.providers == ["openai"]
    save_request = httpx_mock.get_requests()[0]
    assert json.loads(save_request.content) == {"provider": "openai", "apiKey": "sk-test"}


@pytest.mark.asyncio
async def test_models_catalog(async_client, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="GET",
        url=f"{BASE}/models",
        json={
            "models": [{
                "id": "gpt-4o",
                "name": "GPT-4o",
                "provider": "openai",
                "modelId": "gpt-4o",
                "description": "Multimodal flagship",
                "contextWindow": 128000,
                "maxOutput": 16384,
                "capabilities": ["text", "code"],
                "bestFor": ["coding"],
                "pricing": {"input": 2.5, "output": 10.0},
            }],
            "availableProviders": ["openai"],
            "configuredProviders": ["openai"],
            "defaultModel": "gemini-2.5-pro",
            "statistics": {"totalModels": 1},
        },
    )

    catalog = await async_client.models.list()

    assert isinstance(catalog, ModelCatalog)
    assert catalog.models[0].context_window == 128000
    assert catalog.configured_providers == ["openai"]
    assert catalog.default_model == "gemini-2.5-pro"


@pytest.mark.asyncio
async def test_models_filter_by_provider(async_client, httpx_mock: HTTPXMock):
    httpx_mock.add_response(
        method="GET",
        url=f"{BASE}/models?provider=x-ai",
        json={"provider": "x-ai", "models": [], "count": 0},
    )

    result = await async_client.models.filter(provider="x-ai")

    assert result.count == 0


@pytest.mark.asyncio
async def test_github_import(async_client, httpx_mock: HTTPXMock, project_id, mock_file_response):
    httpx_mock.add_response(
        method="POST",
        url=f"{BASE}/github/import",
        json={"imported": [mock_file_response], "skipped": ["logo.png"]},
    )

    result = await async_client.github.import_files("https://github.com/octocat/Hello-World", project_id)

    assert isinstance(result, GitHubImportResponse)
    assert result.imported[0].path == "index.html"
    assert result.skipped == ["logo.png"]
    body = json.loads(httpx_mock.get_request().content)
    assert body["projectId"] == project_id
