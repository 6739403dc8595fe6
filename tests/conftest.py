"""
Pytest configuration and shared fixtures for AI Studio tests

Provides:
- In-memory SQLite database per test
- Test users with bearer tokens
- A FastAPI TestClient wired to the test database
- A fake streaming chat model in place of ChatLiteLLM
"""

import os

# Settings are read at import time; pin them before backend is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["API_KEY_ENCRYPTION_KEY"] = ""
os.environ["ENVIRONMENT"] = "test"
os.environ["DEBUG"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
for _key in (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GOOGLE_GENERATIVE_AI_API_KEY",
    "XAI_API_KEY",
    "OPENROUTER_API_KEY",
    "GITHUB_TOKEN",
):
    os.environ[_key] = ""

import pytest
from typing import Any, Generator, List, Optional
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessageChunk
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from backend.config import Settings, settings
from backend.core.security import generate_access_token
from backend.database import Base, get_db, get_session_factory
from backend.models import AccessToken, ChatMessage, File, Project, User


@pytest.fixture
def test_db_engine():
    """Fresh in-memory SQLite database shared by every session of one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_db_engine):
    """Session factory used for writes outside the request session"""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_db_engine)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _create_user(db: Session, email: str):
    user = User(email=email, name="Test User", is_active=True)
    db.add(user)
    db.commit()
    db.refresh(user)

    token, token_hash = generate_access_token()
    db.add(AccessToken(user_id=user.id, token_hash=token_hash, token_prefix=token[:15], name="test"))
    db.commit()
    return user, token


@pytest.fixture
def test_user_with_token(db_session):
    return _create_user(db_session, "test@example.com")


@pytest.fixture
def test_user(test_user_with_token) -> User:
    return test_user_with_token[0]


@pytest.fixture
def auth_headers(test_user_with_token):
    return {"Authorization": f"Bearer {test_user_with_token[1]}"}


@pytest.fixture
def other_user_headers(db_session):
    """A second user, for ownership checks"""
    _, token = _create_user(db_session, "other@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_project(db_session, test_user) -> Project:
    project = Project(user_id=test_user.id, name="Test Project", description="Test description")
    db_session.add(project)
    db_session.commit()
    db_session.refresh(project)
    return project


@pytest.fixture
def add_messages(db_session):
    """Insert messages with strictly increasing timestamps"""

    def _add(project: Project, contents: List[str], start: Optional[datetime] = None) -> List[ChatMessage]:
        start = start or datetime(2024, 1, 1, tzinfo=timezone.utc)
        messages = []
        for i, content in enumerate(contents):
            msg = ChatMessage(
                project_id=project.id,
                role="user" if i % 2 == 0 else "assistant",
                content=content,
                model="gpt-4o",
                created_at=start + timedelta(seconds=i),
            )
            db_session.add(msg)
            messages.append(msg)
        db_session.commit()
        return messages

    return _add


@pytest.fixture
def add_file(db_session):
    def _add(project: Project, path: str, content: str = "", language: str = "text", offset: int = 0) -> File:
        f = File(
            project_id=project.id,
            path=path,
            content=content,
            language=language,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=offset),
        )
        db_session.add(f)
        db_session.commit()
        db_session.refresh(f)
        return f

    return _add


@pytest.fixture
def client(db_session, session_factory) -> Generator[TestClient, None, None]:
    """TestClient bound to the test database"""
    from backend.main import app

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def env_keys(monkeypatch):
    """Shared provider keys as if configured in the environment"""
    keys = {
        "OPENAI_API_KEY": "sk-env-openai-0000",
        "ANTHROPIC_API_KEY": "sk-ant-env-0000",
        "GOOGLE_GENERATIVE_AI_API_KEY": "AIza-env-0000",
        "XAI_API_KEY": "xai-env-0000",
        "OPENROUTER_API_KEY": "sk-or-env-0000",
    }
    for name, value in keys.items():
        monkeypatch.setattr(settings, name, value)
    return keys


class FakeChatModel:
    """Stands in for ChatLiteLLM: records the prompt, streams canned chunks"""

    def __init__(self, chunks: List[str], error: Optional[Exception] = None, error_after: int = 0, **kwargs: Any):
        self.kwargs = kwargs
        self.chunks = chunks
        self.error = error
        self.error_after = error_after
        self.calls: List[list] = []
        self.closed = False
        self.finished = False

    async def astream(self, messages):
        self.calls.append(messages)
        try:
            for i, text in enumerate(self.chunks):
                if self.error is not None and i == self.error_after:
                    raise self.error
                yield AIMessageChunk(content=text)
            if self.error is not None and self.error_after >= len(self.chunks):
                raise self.error
            self.finished = True
        finally:
            self.closed = True


class FakeLLMFactory:
    """Patched over ChatLiteLLM; every construction is recorded"""

    def __init__(self):
        self.chunks = ["Hello", " world"]
        self.error: Optional[Exception] = None
        self.error_after = 0
        self.instances: List[FakeChatModel] = []

    def __call__(self, **kwargs: Any) -> FakeChatModel:
        llm = FakeChatModel(list(self.chunks), self.error, self.error_after, **kwargs)
        self.instances.append(llm)
        return llm

    @property
    def last(self) -> FakeChatModel:
        return self.instances[-1]


@pytest.fixture
def fake_llm(monkeypatch) -> FakeLLMFactory:
    factory = FakeLLMFactory()
    monkeypatch.setattr("backend.services.provider_factory.ChatLiteLLM", factory)
    return factory


@pytest.fixture
def make_settings():
    """Build isolated Settings; provider keys blank unless given"""

    def _build(**overrides) -> Settings:
        values = {
            "SECRET_KEY": "resolver-secret",
            "OPENAI_API_KEY": "",
            "ANTHROPIC_API_KEY": "",
            "GOOGLE_GENERATIVE_AI_API_KEY": "",
            "XAI_API_KEY": "",
            "OPENROUTER_API_KEY": "",
        }
        values.update(overrides)
        return Settings(**values)

    return _build


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests for individual components"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests for API endpoints"
    )
