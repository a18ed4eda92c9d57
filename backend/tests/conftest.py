"""
Pytest configuration and fixtures for preview backend tests.
"""

from __future__ import annotations

import os

# Set test environment variables before importing config
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("PREVIEW_SECRET", "test-secret-key-for-testing-only")
os.environ.setdefault("ENVIRONMENT", "development")

import httpx  # noqa: E402
import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from backend.main import app  # noqa: E402
from backend.services.snapshots import get_snapshot_store  # noqa: E402
from pagekit.store import MemoryBlobStorage, SnapshotStore  # noqa: E402


@pytest.fixture
def storage():
    """In-memory blob backend standing in for R2."""
    return MemoryBlobStorage()


@pytest.fixture
def store(storage):
    """Snapshot store injected into every route for the duration of a test."""
    snapshot_store = SnapshotStore(storage)
    app.dependency_overrides[get_snapshot_store] = lambda: snapshot_store
    yield snapshot_store
    app.dependency_overrides.pop(get_snapshot_store, None)


@pytest_asyncio.fixture
async def async_client(store):
    """Async HTTP client against the ASGI app."""
    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
