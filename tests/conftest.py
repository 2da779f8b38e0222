"""Shared test fixtures for the Taskboard tests"""

import os
from typing import AsyncGenerator

import pytest
import pytest_asyncio

# Set test environment before importing app
os.environ["SEED_SAMPLE_DATA"] = "false"
os.environ["DATABASE_PATH"] = "/tmp/test_taskboard.json"

from taskboard.services.drag import DragSession  # noqa: E402
from taskboard.services.storage import Storage  # noqa: E402
from taskboard.services.store import BoardStore  # noqa: E402


# =============================================================================
# Store Fixtures
# =============================================================================

@pytest.fixture
def storage():
    """In-memory TinyDB storage"""
    storage = Storage()
    storage.initialize()
    yield storage
    storage.close()


@pytest.fixture
def store(storage) -> BoardStore:
    """Empty store without sample data"""
    store = BoardStore(storage, seed=False)
    store.initialize()
    return store


@pytest.fixture
def board(store):
    """A fresh board with the default columns"""
    return store.add_board("Sprint 1")


@pytest.fixture
def columns(board):
    """The default columns keyed by name"""
    return {c.name: c for c in board.columns}


@pytest.fixture
def session(store) -> DragSession:
    return DragSession(store)


# =============================================================================
# Application and Client Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def app(store):
    """FastAPI application wired to the in-memory store"""
    from taskboard.main import create_app

    fastapi_app = create_app()
    fastapi_app.state.store = store
    fastapi_app.state.drag = DragSession(store)
    return fastapi_app


@pytest_asyncio.fixture
async def test_client(app) -> AsyncGenerator:
    """Create async HTTP client for testing"""
    from httpx import AsyncClient, ASGITransport

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
