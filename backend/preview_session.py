"""
Preview sessions.

A preview session binds one viewer's browser to one snapshot id. It is
carried in an HTTP-only cookie holding a signed JWT, verified on every
request, so render logic never trusts a client-supplied snapshot id.

States: no cookie (normal rendering) and an active session bound to a
snapshot id. Entering again replaces the binding; exiting clears it.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from typing import Annotated

import jwt
from fastapi import Cookie, Response

from backend import config
from pagekit.types import PreviewSession

logger = logging.getLogger(__name__)

TOKEN_TYPE = "preview"


def create_preview_token(snapshot_id: str) -> str:
    """
    Create a signed preview token.

    Args:
        snapshot_id: Snapshot the session is bound to

    Returns:
        Signed JWT string
    """
    now = datetime.now(UTC)
    payload = {
        "sub": snapshot_id,
        "typ": TOKEN_TYPE,
        "iat": now,
        "exp": now + timedelta(hours=config.settings.PREVIEW_SESSION_HOURS),
    }
    return jwt.encode(payload, config.settings.PREVIEW_SECRET, algorithm=config.settings.JWT_ALGORITHM)


def decode_preview_token(token: str) -> PreviewSession | None:
    """
    Verify a preview token.

    Returns None for expired, tampered or foreign tokens, which the caller
    treats as "no active preview".
    """
    try:
        payload = jwt.decode(
            token,
            config.settings.PREVIEW_SECRET,
            algorithms=[config.settings.JWT_ALGORITHM],
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        logger.info("Preview token expired")
        return None
    except jwt.InvalidTokenError as e:
        logger.warning("Rejected preview token: %s", e)
        return None

    if payload.get("typ") != TOKEN_TYPE or not isinstance(payload.get("sub"), str):
        logger.warning("Rejected preview token with unexpected claims")
        return None

    return PreviewSession(
        snapshot_id=payload["sub"],
        issued_at=datetime.fromtimestamp(payload["iat"], UTC),
    )


def enter_preview(response: Response, snapshot_id: str) -> None:
    """
    Activate preview for this browser, replacing any earlier binding.

    The snapshot is not looked up here; a missing snapshot surfaces when the
    page is rendered.
    """
    response.set_cookie(
        key=config.settings.PREVIEW_COOKIE,
        value=create_preview_token(snapshot_id),
        httponly=True,
        secure=config.settings.SECURE_COOKIES,
        samesite="lax",
        max_age=config.settings.PREVIEW_SESSION_HOURS * 3600,
        path="/",
    )
    logger.info("Entered preview for snapshot %s", snapshot_id)


def exit_preview(response: Response) -> None:
    """Deactivate preview by expiring the cookie."""
    response.set_cookie(
        key=config.settings.PREVIEW_COOKIE,
        value="",
        httponly=True,
        secure=config.settings.SECURE_COOKIES,
        samesite="lax",
        max_age=0,  # Expire immediately
        path="/",
    )
    logger.info("Exited preview")


async def get_preview_session(
    preview_session: Annotated[str | None, Cookie()] = None,
) -> PreviewSession | None:
    """
    FastAPI dependency resolving the viewer's preview session.

    Returns None when there is no cookie or it does not verify.
    """
    if not preview_session:
        return None
    return decode_preview_token(preview_session)
