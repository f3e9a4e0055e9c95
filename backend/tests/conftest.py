"""
Pytest configuration and fixtures
"""
import os

# Configuration is read at import time, so the test environment must be in
# place before any vidhisahayak module is imported. Provider keys are blanked
# so no test can reach a real API.
os.environ["ENV"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key-with-at-least-32-characters"
os.environ["DATABASE_URL"] = "sqlite://"
for _key in ("GEMINI_API_KEY", "PERPLEXITY_API_KEY", "OPENAI_API_KEY", "GOOGLE_TTS_API_KEY"):
    os.environ[_key] = ""

from datetime import datetime
from typing import Callable, List, Optional, Sequence

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from vidhisahayak.core.config import AIConfig
from vidhisahayak.core.database import SessionLocal, engine, get_db
from vidhisahayak.models import Base, User
from vidhisahayak.services.llm_providers import LLMProvider, ProviderChain, ProviderError, ProviderResult
from vidhisahayak.services.prompt_builder import PromptMessage
from vidhisahayak.api.v1.auth import create_access_token, get_password_hash


class FakeProvider(LLMProvider):
    """Provider that replays scripted outcomes and records what it was sent."""

    def __init__(self, name: str, outcomes: Sequence = (), configured: bool = True, settings: Optional[AIConfig] = None):
        super().__init__("fake-key" if configured else None, settings or AIConfig(), sleep=lambda _: None)
        self.name = name
        self.outcomes = list(outcomes)
        self.calls: List[dict] = []

    def generate(self, system_prompt: str, messages: Sequence[PromptMessage]) -> ProviderResult:
        self.calls.append({"system_prompt": system_prompt, "messages": list(messages)})
        outcome = self.outcomes.pop(0) if self.outcomes else ProviderError(self.name, "no scripted outcome")
        if isinstance(outcome, Exception):
            raise outcome
        return ProviderResult(text=outcome, provider=self.name, model=f"{self.name}-test-model")


@pytest.fixture
def fake_provider() -> Callable[..., FakeProvider]:
    return FakeProvider


@pytest.fixture(scope="function")
def db() -> Session:
    """Create a database session for testing"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def chat_chain(monkeypatch):
    """Install a provider chain built from fakes for the chat endpoint."""
    def install(*providers: LLMProvider) -> ProviderChain:
        chain = ProviderChain(providers)
        monkeypatch.setattr("vidhisahayak.api.v1.chat.get_provider_chain", lambda: chain)
        return chain
    return install


@pytest.fixture(scope="function")
def client(db: Session):
    """Create test client with database dependency override"""
    from vidhisahayak.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def stateless_client():
    """Test client for a deployment without a database."""
    from vidhisahayak.main import app

    def override_get_db():
        yield None

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(db: Session, email: str, role: str = "user", password: str = "secret-pass-123") -> User:
    now = datetime.utcnow().isoformat()
    user = User(
        email=email,
        full_name=email.split("@")[0].title(),
        hashed_password=get_password_hash(password),
        role=role,
        preferred_language="English",
        is_active=True,
        created_at=now,
        updated_at=now,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def user(db: Session) -> User:
    return _make_user(db, "asha@example.in")


@pytest.fixture
def other_user(db: Session) -> User:
    return _make_user(db, "ravi@example.in")


@pytest.fixture
def admin(db: Session) -> User:
    return _make_user(db, "admin@example.in", role="admin")


def bearer(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': user.email, 'role': user.role})}"}


@pytest.fixture
def auth_headers(user: User) -> dict:
    return bearer(user)


@pytest.fixture
def headers_for() -> Callable[[User], dict]:
    return bearer
