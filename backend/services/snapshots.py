"""Snapshot store wired to R2."""

from __future__ import annotations

from backend.services.r2 import r2_service
from pagekit.store import SnapshotStore

snapshot_store = SnapshotStore(r2_service)


def get_snapshot_store() -> SnapshotStore:
    """FastAPI dependency. Overridden in tests with an in-memory store."""
    return snapshot_store
