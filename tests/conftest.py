"""Pytest configuration and fixtures for casefile.

Environment is set before app.main is imported: a SECRET_KEY, telemetry off
and local storage under a temporary directory. Firestore stays unconfigured;
view tests override the repository, storage and identity dependencies with
the in-memory fakes from tests.fakes.
"""

import os
import tempfile

os.environ.setdefault("SECRET_KEY", "test-secret-key-for-session-cookies")
os.environ["TELEMETRY_ENABLED"] = "false"
os.environ["STORAGE_BACKEND"] = "local"
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="casefile-test-"))
os.environ["DISPLAY_TIMEZONE"] = "UTC"
os.environ["UI_LOCALE"] = "en"

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.v1.dependencies import (  # noqa: E402
    get_document_repository,
    get_identity_provider,
    get_storage_service,
)
from app.core.config import get_settings  # noqa: E402
from app.core.limiter import limiter  # noqa: E402
from app.infrastructure.security.jwt import create_session_token, new_session  # noqa: E402
from app.main import app  # noqa: E402
from tests.fakes import (  # noqa: E402
    FakeIdentityProvider,
    FakeStorage,
    InMemoryDocumentRepository,
)

TEST_EMAIL = "officer@example.com"
TEST_PASSWORD = "secret123"


@pytest.fixture(autouse=True)
def reset_rate_limits() -> None:
    """Each test starts with empty rate-limit counters."""
    limiter.reset()


@pytest.fixture
def repo() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture
def identity() -> FakeIdentityProvider:
    return FakeIdentityProvider({TEST_EMAIL: TEST_PASSWORD})


@pytest.fixture
def test_app(
    repo: InMemoryDocumentRepository,
    storage: FakeStorage,
    identity: FakeIdentityProvider,
) -> FastAPI:
    """The app with record store, storage and identity provider replaced by fakes."""
    app.dependency_overrides[get_document_repository] = lambda: repo
    app.dependency_overrides[get_storage_service] = lambda: storage
    app.dependency_overrides[get_identity_provider] = lambda: identity
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def client(test_app: FastAPI) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI). Redirects are not followed."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def session_cookie() -> dict[str, str]:
    """Cookie for a signed-in officer."""
    token = create_session_token(new_session(f"uid-{TEST_EMAIL}", TEST_EMAIL))
    return {get_settings().session_cookie_name: token}


@pytest.fixture
async def signed_in(client: AsyncClient, session_cookie: dict[str, str]) -> AsyncClient:
    """The client carrying a valid session cookie."""
    for name, value in session_cookie.items():
        client.cookies.set(name, value)
    return client
