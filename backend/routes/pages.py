"""Page serving: GET / renders canonical content or the active preview."""

from __future__ import annotations

import hashlib

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, Response

from backend.content import HOME_PAGE
from backend.preview_session import get_preview_session
from backend.services.snapshots import get_snapshot_store
from pagekit.renderer import render
from pagekit.resolve import resolve_render_context
from pagekit.store import SnapshotStore
from pagekit.types import PreviewSession, RenderOptions

router = APIRouter(tags=["pages"])

# Cache-Control TTL: 5 minutes for stale-while-revalidate, 1 hour shared cache
_CACHE_CONTROL = "public, max-age=300, s-maxage=3600, stale-while-revalidate=86400"
_NO_STORE = "private, no-store"


@router.get("/", response_class=HTMLResponse)
async def serve_page(
    edit: bool = False,
    session: PreviewSession | None = Depends(get_preview_session),
    store: SnapshotStore = Depends(get_snapshot_store),
) -> Response:
    """
    Serve the home page.

    Without a preview session this is the canonical page. With one, the
    session's snapshot is merged over the base content; if it cannot be
    loaded the response is an error page, never the canonical page.

    Cache headers:
    - canonical view: public, 5-min browser TTL, 1-hour CDN TTL, ETag
    - preview, edit and error responses: private, no-store
    """
    context = await resolve_render_context(session.snapshot_id if session else None, store)
    html_bytes = render(HOME_PAGE, context, RenderOptions(edit_mode=edit)).encode("utf-8")

    headers = {"Vary": "Cookie", "X-Content-Type-Options": "nosniff"}
    status_code = 200

    if context.error is not None:
        status_code = 503 if context.error.is_recoverable else 404
        headers["Cache-Control"] = _NO_STORE
    elif context.is_preview or edit:
        headers["Cache-Control"] = _NO_STORE
    else:
        headers["Cache-Control"] = _CACHE_CONTROL
        headers["ETag"] = f'"{hashlib.md5(html_bytes, usedforsecurity=False).hexdigest()}"'

    return Response(
        content=html_bytes,
        status_code=status_code,
        media_type="text/html; charset=utf-8",
        headers=headers,
    )
