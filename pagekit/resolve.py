"""
Pagekit: Render Context Resolution

Turns a preview session's snapshot id into a RenderContext: the overlay to
merge, or the error page to show instead. Performs at most one store read
per call and caches nothing.
"""

from __future__ import annotations

import logging

from pagekit.store import (
    SnapshotAccessDenied,
    SnapshotCorrupt,
    SnapshotNotFound,
    SnapshotStore,
    StoreUnavailable,
)
from pagekit.types import RenderContext, RenderError

logger = logging.getLogger(__name__)

# Not-found and access-denied share one message so the bucket's ACL layout
# is not exposed to viewers.
MISSING_MESSAGE = "The requested preview edit does not exist!"
UNAVAILABLE_MESSAGE = "An error has occurred while connecting to storage. Please refresh the page to try again."


async def resolve_render_context(snapshot_id: str | None, store: SnapshotStore) -> RenderContext:
    """
    Resolve the context for one request.

    A missing snapshot never degrades to canonical content: the context is
    still a preview, carrying an error.
    """
    if snapshot_id is None:
        return RenderContext.canonical()

    try:
        snapshot = await store.load(snapshot_id)
    except SnapshotCorrupt as e:
        logger.warning("Preview snapshot %s is corrupt: %s", snapshot_id, e)
        error = RenderError(message=MISSING_MESSAGE, is_recoverable=False)
    except SnapshotNotFound:
        logger.warning("Preview snapshot %s not found", snapshot_id)
        error = RenderError(message=MISSING_MESSAGE, is_recoverable=False)
    except SnapshotAccessDenied:
        logger.warning("Access denied reading preview snapshot %s", snapshot_id)
        error = RenderError(message=MISSING_MESSAGE, is_recoverable=False)
    except StoreUnavailable:
        logger.exception("Storage unavailable while loading preview snapshot %s", snapshot_id)
        error = RenderError(message=UNAVAILABLE_MESSAGE, is_recoverable=True)
    else:
        return RenderContext(is_preview=True, snapshot_id=snapshot_id, overlay=snapshot)

    return RenderContext(is_preview=True, snapshot_id=snapshot_id, error=error)
