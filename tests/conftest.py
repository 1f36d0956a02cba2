"""
LegalEase File - Shared Test Fixtures
Provides reusable fixtures for the database, the HTTP client and stub
AI collaborators.
"""

import os
from typing import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

# Configure test environment BEFORE importing app
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_legalease.db"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["OPENAI_API_KEY"] = ""
os.environ["CLASSIFIER_TIMEOUT_SECONDS"] = "2"
os.environ["CASE_STORE_SECRET"] = "test-secret"

from app.core.database import close_db, drop_db, get_db_session, init_db  # noqa: E402
from app.dependencies import get_classifier, get_factor_judge, get_generator  # noqa: E402
from app.main import app  # noqa: E402
from app.services.document_classifier import DocumentClassifier  # noqa: E402
from app.services.document_generator import DocumentGenerator  # noqa: E402


# =============================================================================
# Core Fixtures
# =============================================================================

@pytest.fixture
def anyio_backend():
    """Use asyncio for async tests."""
    return "asyncio"


@pytest.fixture
async def database() -> AsyncGenerator[None, None]:
    """Create database tables before the test and drop them after."""
    await init_db()
    yield
    await drop_db()
    await close_db()


@pytest.fixture
async def db_session(database):
    async with get_db_session() as session:
        yield session


@pytest.fixture
async def client(database) -> AsyncGenerator[AsyncClient, None]:
    """Async test client; dependency overrides are reset afterwards."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# =============================================================================
# Stub Collaborators
# =============================================================================

@pytest.fixture
def use_classifier():
    """Install a stub classifier for the HTTP layer: use_classifier(StubClassifier(...))."""
    def _install(classifier: DocumentClassifier) -> DocumentClassifier:
        app.dependency_overrides[get_classifier] = lambda: classifier
        return classifier
    return _install


@pytest.fixture
def use_factor_judge():
    def _install(judge):
        app.dependency_overrides[get_factor_judge] = lambda: judge
        return judge
    return _install


@pytest.fixture
def use_generator():
    def _install(generator: DocumentGenerator) -> DocumentGenerator:
        app.dependency_overrides[get_generator] = lambda: generator
        return generator
    return _install
