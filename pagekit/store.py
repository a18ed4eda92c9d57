"""
Pagekit: Snapshot Store

Sits between the pure kernel and the blob backend. Persists a list of field
edits under a freshly generated id and reads it back.

Operations: save, load. There is no update or delete: every save creates a
new snapshot, and snapshots are removed only by the bucket's retention
policy.

This is where IO happens, and only through the injected BlobStorage.
"""

from __future__ import annotations

import json
import logging
import re
import uuid
from collections.abc import Iterable
from typing import Any

from pagekit.types import FieldEdit, Snapshot

logger = logging.getLogger(__name__)

SNAPSHOT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class BlobError(Exception):
    """Base class for blob backend failures."""
    pass


class BlobNotFound(BlobError):
    """The backend reports the object absent."""
    pass


class BlobAccessDenied(BlobError):
    """The backend refused access (permission/ACL), distinct from absence."""
    pass


class BlobUnavailable(BlobError):
    """Transient backend or network failure, including timeouts."""
    pass


class StoreError(Exception):
    """Base class for snapshot store failures."""
    pass


class StoreUnavailable(StoreError):
    """The backend could not be reached. Retryable by the user."""
    pass


class SnapshotNotFound(StoreError):
    """The snapshot id does not resolve to a stored snapshot."""
    pass


class SnapshotCorrupt(SnapshotNotFound):
    """A blob exists under the id but is not a snapshot payload."""
    pass


class SnapshotAccessDenied(StoreError):
    """The backend refused to read the snapshot."""
    pass


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class BlobStorage:
    """
    Abstract key/value blob interface.
    Implement with R2 for production, or in-memory for tests.
    """

    async def get(self, key: str) -> bytes:
        """Fetch a blob. Raises BlobNotFound, BlobAccessDenied or BlobUnavailable."""
        raise NotImplementedError

    async def put(self, key: str, data: bytes) -> None:
        """Write a blob. Raises BlobUnavailable."""
        raise NotImplementedError


class MemoryBlobStorage(BlobStorage):
    """In-memory storage for testing and local development."""

    def __init__(self) -> None:
        self.blobs: dict[str, bytes] = {}
        self.denied: set[str] = set()
        self.unavailable = False

    async def get(self, key: str) -> bytes:
        if self.unavailable:
            raise BlobUnavailable("memory storage marked unavailable")
        if key in self.denied:
            raise BlobAccessDenied(key)
        try:
            return self.blobs[key]
        except KeyError:
            raise BlobNotFound(key) from None

    async def put(self, key: str, data: bytes) -> None:
        if self.unavailable:
            raise BlobUnavailable("memory storage marked unavailable")
        self.blobs[key] = data


# ---------------------------------------------------------------------------
# Payload format
# ---------------------------------------------------------------------------


def snapshot_key(snapshot_id: str) -> str:
    return f"{snapshot_id}.json"


def serialize_edits(edits: Iterable[FieldEdit]) -> bytes:
    """JSON list of {"id", "text"} objects, order preserved."""
    payload = [edit.to_dict() for edit in edits]
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def parse_edits(data: bytes) -> tuple[FieldEdit, ...]:
    """
    Parse a stored payload back into field edits.

    Payloads written by earlier editors used "innerText" instead of
    "text"; both are accepted.
    """
    try:
        payload: Any = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SnapshotCorrupt(f"Snapshot payload is not JSON: {e}") from e

    if not isinstance(payload, list):
        raise SnapshotCorrupt("Snapshot payload is not a list")

    edits: list[FieldEdit] = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise SnapshotCorrupt(f"Edit {i} is not an object")
        field_id = item.get("id")
        text = item.get("text", item.get("innerText"))
        if not isinstance(field_id, str) or not isinstance(text, str):
            raise SnapshotCorrupt(f"Edit {i} is missing a string id or text")
        edits.append(FieldEdit(id=field_id, text=text))
    return tuple(edits)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class SnapshotStore:
    """Append-only snapshot persistence over a BlobStorage backend."""

    def __init__(self, storage: BlobStorage) -> None:
        self._storage = storage

    async def save(self, edits: Iterable[FieldEdit]) -> str:
        """
        Persist edits under a new id and return the id.

        Not idempotent: identical edits saved twice produce two snapshots.
        """
        snapshot_id = uuid.uuid4().hex
        data = serialize_edits(edits)
        try:
            await self._storage.put(snapshot_key(snapshot_id), data)
        except BlobError as e:
            logger.exception("Failed to write snapshot %s", snapshot_id)
            raise StoreUnavailable("Could not write the snapshot to storage.") from e

        logger.info("Saved snapshot %s (%d bytes)", snapshot_id, len(data))
        return snapshot_id

    async def load(self, snapshot_id: str) -> Snapshot:
        """Read a snapshot. Pure read, safe to retry."""
        if not SNAPSHOT_ID_PATTERN.match(snapshot_id):
            raise SnapshotNotFound(snapshot_id)

        try:
            data = await self._storage.get(snapshot_key(snapshot_id))
        except BlobNotFound as e:
            raise SnapshotNotFound(snapshot_id) from e
        except BlobAccessDenied as e:
            raise SnapshotAccessDenied(snapshot_id) from e
        except BlobError as e:
            raise StoreUnavailable(f"Could not read snapshot {snapshot_id}") from e

        return Snapshot(id=snapshot_id, edits=parse_edits(data))
