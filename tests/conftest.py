# tests/conftest.py
import os

# Set up test environment variables BEFORE any other imports
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("LOCAL_DATABASE_URL", "sqlite://")

import httpx
import pytest
import pytest_asyncio

from factories import SystemProjectFactory, TaskFactory, as_backend_record
from mock_backend import MockBackend
from projectstore.core.config import Settings
from projectstore.core.context import build_context
from projectstore.core.security import AuthState
from projectstore.database import create_local_engine
from projectstore.main import create_app
from projectstore.storage.kv import MemoryKeyValueStorage, SqlKeyValueStorage


@pytest.fixture
def test_settings():
    """Settings pointing at the in-process backend and an in-memory database."""
    return Settings(
        environment="testing",
        api_base_url="http://backend.test",
        api_prefix="/api/v1",
        local_database_url="sqlite://",
        page_size=20,
    )


@pytest.fixture
def mock_backend(test_settings):
    return MockBackend(prefix=test_settings.api_prefix)


@pytest.fixture
def auth():
    """Anonymous until a test signs in."""
    return AuthState()


@pytest.fixture
def durable_storage():
    return MemoryKeyValueStorage()


@pytest.fixture
def sql_storage():
    """Durable storage backed by an in-memory SQLite database."""
    engine = create_local_engine("sqlite://")
    yield SqlKeyValueStorage(engine)
    engine.dispose()


@pytest.fixture
def session_storage():
    return MemoryKeyValueStorage()


@pytest_asyncio.fixture
async def ctx(test_settings, auth, durable_storage, session_storage, mock_backend):
    """Store context wired to the mock backend through the real BackendClient."""
    context = build_context(
        test_settings,
        auth=auth,
        durable_storage=durable_storage,
        session_storage=session_storage,
        transport=httpx.ASGITransport(app=mock_backend.app),
    )
    try:
        yield context
    finally:
        await context.aclose()


@pytest.fixture
def signed_in(auth):
    auth.sign_in("test-access-token")
    return auth


@pytest.fixture
def system_project(mock_backend):
    """A shared example project with two tasks, served by the backend."""
    project = SystemProjectFactory()
    mock_backend.add_project(as_backend_record(project))
    for title in ("Task A", "Task B"):
        task = TaskFactory(project_id=project.id, title=title)
        mock_backend.add_child("todos", project.id, as_backend_record(task))
    return project


@pytest_asyncio.fixture
async def client(test_settings, ctx):
    """HTTP client for the local API, sharing the test's store context."""
    app = create_app(test_settings, context=ctx)
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app), base_url="http://test"
    ) as ac:
        yield ac
