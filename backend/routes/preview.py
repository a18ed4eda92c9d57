"""Preview routes: save a snapshot, enter and exit preview."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, Depends
from fastapi.responses import PlainTextResponse, RedirectResponse, Response

from backend import config
from backend.models.snapshot import FieldEditIn, SaveResponse
from backend.preview_session import enter_preview, exit_preview
from backend.services.snapshots import get_snapshot_store
from pagekit.store import SnapshotStore, StoreUnavailable

router = APIRouter(prefix="/api", tags=["preview"])


@router.post("/save", status_code=200, response_model=SaveResponse)
async def save_snapshot(
    edits: Annotated[list[FieldEditIn], Body(max_length=config.settings.MAX_EDITS_PER_SNAPSHOT)],
    store: SnapshotStore = Depends(get_snapshot_store),
) -> Response | SaveResponse:
    """
    Persist captured edits as a new snapshot.

    Every call creates a new snapshot id, even for identical edits. On a
    storage failure the response is 503 with the error message as plain
    text.
    """
    try:
        snapshot_id = await store.save(edit.to_edit() for edit in edits)
    except StoreUnavailable as e:
        return PlainTextResponse(str(e), status_code=503)

    return SaveResponse(snapshot_id=snapshot_id)


@router.get("/share/{snapshot_id}")
async def share_snapshot(snapshot_id: str) -> RedirectResponse:
    """
    Enter preview for a snapshot and redirect to the page.

    The snapshot is not checked here; a missing one renders as an error page.
    """
    response = RedirectResponse(url="/")
    enter_preview(response, snapshot_id)
    return response


@router.get("/exit")
async def exit_snapshot_preview() -> RedirectResponse:
    """Clear the preview session and redirect to the live page."""
    response = RedirectResponse(url="/")
    exit_preview(response)
    return response
