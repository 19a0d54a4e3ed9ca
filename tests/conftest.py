"""Tests configuration and fixtures."""

from typing import AsyncGenerator, Optional

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from senali.api.dependencies import get_database, get_llm
from senali.config import Settings, get_settings
from senali.config.settings import RateLimitSettings
from senali.infrastructure.auth import (
    AuthenticatedPrincipal,
    InvalidTokenError,
    TokenVerifier,
    VerifierUnavailableError,
    get_token_verifier,
)
from senali.infrastructure.database import DatabaseManager, get_async_session
from senali.infrastructure.llm import LLMProvider, LLMResponse
from senali.services.prompt import BuiltPrompt

ADMIN_EMAIL = "admin@example.com"
ADMIN_TOKEN = "admin-token"
UNAVAILABLE_TOKEN = "keys-down-token"


class FakeTokenVerifier(TokenVerifier):
    """
    Accepts tokens of the form "token-<uid>" plus the admin token.
    UNAVAILABLE_TOKEN behaves as if the signing keys were unreachable.

    The principal's email is <uid>@example.com.
    """

    async def verify(self, token: str) -> AuthenticatedPrincipal:
        if token == ADMIN_TOKEN:
            return AuthenticatedPrincipal(uid="admin", email=ADMIN_EMAIL, name="Admin")
        if token == UNAVAILABLE_TOKEN:
            raise VerifierUnavailableError("Signing keys unreachable")
        if not token.startswith("token-"):
            raise InvalidTokenError("Unknown test token")
        uid = token.removeprefix("token-")
        return AuthenticatedPrincipal(uid=uid, email=f"{uid}@example.com")


class FakeLLMProvider(LLMProvider):
    """
    Scripted LLM provider.

    Returns queued replies in order, then the default reply. A queued
    exception is raised instead of answering. Every prompt is recorded.
    """

    def __init__(self, default_reply: str = "You're doing a great job.") -> None:
        self.default_reply = default_reply
        self.replies: list = []
        self.prompts: list[BuiltPrompt] = []
        self.configured = True

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def default_model(self) -> str:
        return "fake-model"

    def queue(self, *replies) -> None:
        self.replies.extend(replies)

    async def generate(
        self,
        prompt: BuiltPrompt,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
    ) -> LLMResponse:
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if self.replies else self.default_reply
        if isinstance(reply, Exception):
            raise reply
        return LLMResponse(
            content=reply,
            usage={"prompt_tokens": 30, "completion_tokens": 12, "total_tokens": 42},
            model="fake-model",
            provider="fake",
            latency_ms=5,
        )

    def is_configured(self) -> bool:
        return self.configured


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with mock values."""
    return Settings(
        env="development",
        debug=False,
        admin_emails=[ADMIN_EMAIL],
        rate_limit=RateLimitSettings(rate_limit_enabled=False),
    )


@pytest.fixture
def fake_llm() -> FakeLLMProvider:
    return FakeLLMProvider()


@pytest.fixture
async def db() -> AsyncGenerator[DatabaseManager, None]:
    """Fresh in-memory SQLite database per test."""
    manager = DatabaseManager()
    await manager.initialize(url="sqlite+aiosqlite://")
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def app(test_settings: Settings, db: DatabaseManager, fake_llm: FakeLLMProvider) -> FastAPI:
    from senali.main import create_application

    application = create_application(test_settings)

    async def override_session():
        async with db.session() as session:
            yield session

    application.dependency_overrides[get_async_session] = override_session
    application.dependency_overrides[get_settings] = lambda: test_settings
    application.dependency_overrides[get_token_verifier] = lambda: FakeTokenVerifier()
    application.dependency_overrides[get_llm] = lambda: fake_llm
    application.dependency_overrides[get_database] = lambda: db
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def bearer(uid: str) -> dict[str, str]:
    return {"Authorization": f"Bearer token-{uid}"}


@pytest.fixture
def auth_headers():
    """Factory for another user's Authorization header."""
    return bearer


@pytest.fixture
def headers() -> dict[str, str]:
    return bearer("parent1")


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}
