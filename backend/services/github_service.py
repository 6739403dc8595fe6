"""
GitHub Service - read-only access to public repositories

Thin wrapper over the GitHub REST API used to seed projects with files:
repository metadata, directory listings and decoded file content.
"""

import base64
import logging
import re
from typing import List, Optional, Tuple

import httpx
from pydantic import BaseModel, Field

from backend.config import settings
from backend.core.exceptions import GitHubError

logger = logging.getLogger(__name__)

REPO_URL_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)")

TEXT_EXTENSIONS = {
    "js", "jsx", "ts", "tsx", "html", "css", "json", "md", "txt",
    "py", "java", "cpp", "c", "h", "php", "rb", "go", "rs", "swift",
    "kt", "scala", "sh", "yml", "yaml", "xml", "sql", "dockerfile",
}

LANGUAGE_BY_EXTENSION = {
    "js": "javascript",
    "jsx": "jsx",
    "ts": "typescript",
    "tsx": "tsx",
    "html": "html",
    "css": "css",
    "py": "python",
    "json": "json",
    "md": "markdown",
}


class GitHubRepository(BaseModel):
    """Repository metadata"""
    name: str
    full_name: str = Field(..., serialization_alias="fullName")
    description: Optional[str] = None
    stars: int = 0
    url: str
    default_branch: str = Field(..., serialization_alias="defaultBranch")


class GitHubContent(BaseModel):
    """One entry of a directory listing"""
    name: str
    path: str
    type: str  # file, dir, symlink, submodule
    size: int = 0
    sha: str
    download_url: Optional[str] = Field(None, serialization_alias="downloadUrl")


def parse_repo_url(url: str) -> Tuple[str, str]:
    """
    Extract (owner, repo) from a GitHub URL

    Raises:
        GitHubError: URL does not point at a repository (400)
    """
    match = REPO_URL_PATTERN.search(url or "")
    if not match:
        raise GitHubError("Invalid GitHub repository URL", status_code=400)

    owner, repo = match.group(1), match.group(2)
    if repo.endswith(".git"):
        repo = repo[:-4]
    return owner, repo


def is_text_file(filename: str) -> bool:
    extension = filename.rsplit(".", 1)[-1].lower()
    return extension in TEXT_EXTENSIONS


def language_for(filename: str) -> str:
    """Editor language hint from a file name"""
    if "." not in filename:
        return "plaintext"
    return LANGUAGE_BY_EXTENSION.get(filename.rsplit(".", 1)[-1].lower(), "plaintext")


class GitHubService:
    """
    Async GitHub REST client

    Example:
        >>> async with GitHubService() as github:
        ...     repo = await github.get_repository("https://github.com/octocat/Hello-World")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": settings.APP_NAME,
        }
        token = token if token is not None else settings.GITHUB_TOKEN
        if token:
            headers["Authorization"] = f"Bearer {token}"

        self._client = client or httpx.AsyncClient(
            base_url=base_url or settings.GITHUB_API_URL,
            headers=headers,
            timeout=timeout or settings.GITHUB_TIMEOUT,
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self._client.aclose()

    async def _get(self, path: str) -> object:
        try:
            response = await self._client.get(path)
        except httpx.HTTPError as e:
            logger.error(f"GitHub request failed: {path}: {e}")
            raise GitHubError("Failed to reach GitHub") from e

        if response.status_code == 404:
            raise GitHubError("Repository or path not found", status_code=404)
        if response.status_code >= 400:
            logger.warning(f"GitHub API error {response.status_code} for {path}")
            raise GitHubError(f"GitHub API error ({response.status_code})")

        return response.json()

    async def get_repository(self, url: str) -> GitHubRepository:
        owner, repo = parse_repo_url(url)
        data = await self._get(f"/repos/{owner}/{repo}")

        return GitHubRepository(
            name=data["name"],
            full_name=data["full_name"],
            description=data.get("description"),
            stars=data.get("stargazers_count", 0),
            url=data["html_url"],
            default_branch=data.get("default_branch", "main"),
        )

    async def list_contents(self, url: str, path: str = "") -> List[GitHubContent]:
        """Entries at a path; a file path yields a one-element list"""
        owner, repo = parse_repo_url(url)
        data = await self._get(f"/repos/{owner}/{repo}/contents/{path.strip('/')}")

        items = data if isinstance(data, list) else [data]
        return [
            GitHubContent(
                name=item["name"],
                path=item["path"],
                type=item["type"],
                size=item.get("size", 0),
                sha=item["sha"],
                download_url=item.get("download_url"),
            )
            for item in items
        ]

    async def get_file_content(self, url: str, path: str) -> str:
        """
        Decoded text of one file

        Raises:
            GitHubError: Path is not a file or content is not UTF-8 text
        """
        owner, repo = parse_repo_url(url)
        data = await self._get(f"/repos/{owner}/{repo}/contents/{path.strip('/')}")

        if not isinstance(data, dict) or "content" not in data:
            raise GitHubError("Path is not a file", status_code=400)

        try:
            return base64.b64decode(data["content"]).decode("utf-8")
        except (ValueError, UnicodeDecodeError) as e:
            raise GitHubError("File is not valid UTF-8 text", status_code=400) from e
