"""Shared fixtures: a fresh app, store and stubbed completion client per test.

Testing Strategy:
1. Storage: a fresh MemoryStorage per test, injected through dependency overrides
2. AI Services: the LLM client is a mock at the service boundary; no provider calls
3. Rate limiting: disabled so request-heavy tests are not throttled
"""

import os


# Configure the environment before anything imports the settings
os.environ["ENVIRONMENT"] = "test"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["PRIMARY_LLM_MODEL"] = ""

from collections.abc import AsyncGenerator, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from codetutor.ai.service import AIService, get_ai_service
from codetutor.assistant.sessions import ChatSessionRegistry, get_session_registry
from codetutor.main import create_app
from codetutor.storage import MemoryStorage, get_storage


@pytest.fixture
def storage() -> MemoryStorage:
    """Empty store."""
    return MemoryStorage()


@pytest.fixture
def seeded_storage() -> MemoryStorage:
    """Store holding the sample "Python Basics" lesson (lesson 1, slides 1-4)."""
    return MemoryStorage(seed=True)


@pytest.fixture
def llm() -> MagicMock:
    """Stub LLM client; tests set ``llm.get_completion`` return values or side effects."""
    client = MagicMock()
    client.get_completion = AsyncMock(return_value="Hi! Let's write some code.")
    return client


@pytest.fixture
def ai_service(llm: MagicMock) -> AIService:
    return AIService(llm_client=llm)


@pytest.fixture
def sessions() -> ChatSessionRegistry:
    return ChatSessionRegistry()


@pytest.fixture
def app_factory(ai_service: AIService, sessions: ChatSessionRegistry) -> Callable[[MemoryStorage], FastAPI]:
    """Build an app wired to the given store, the stub AI service and fresh chat sessions."""

    def _build(store: MemoryStorage) -> FastAPI:
        app = create_app()
        app.dependency_overrides[get_storage] = lambda: store
        app.dependency_overrides[get_ai_service] = lambda: ai_service
        app.dependency_overrides[get_session_registry] = lambda: sessions
        return app

    return _build


@pytest.fixture
def app(app_factory: Callable[[MemoryStorage], FastAPI], storage: MemoryStorage) -> FastAPI:
    return app_factory(storage)


@pytest.fixture
def seeded_app(app_factory: Callable[[MemoryStorage], FastAPI], seeded_storage: MemoryStorage) -> FastAPI:
    return app_factory(seeded_storage)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client over an empty store."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as http:
        yield http


@pytest_asyncio.fixture
async def seeded_client(seeded_app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client over a store holding the sample lesson."""
    async with AsyncClient(transport=ASGITransport(app=seeded_app), base_url="http://test") as http:
        yield http
