"""
Tests for preview session tokens.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Response

from backend import config
from backend.preview_session import (
    create_preview_token,
    decode_preview_token,
    enter_preview,
    exit_preview,
    get_preview_session,
)


def sign(payload: dict, secret: str | None = None) -> str:
    return jwt.encode(payload, secret or config.settings.PREVIEW_SECRET, algorithm=config.settings.JWT_ALGORITHM)


class TestPreviewToken:
    """Token creation and verification."""

    def test_round_trip(self):
        """A fresh token decodes to its snapshot id."""
        session = decode_preview_token(create_preview_token("abc123"))
        assert session is not None
        assert session.snapshot_id == "abc123"
        assert session.issued_at <= datetime.now(UTC)

    def test_claims(self):
        """Token carries sub, typ, iat and exp."""
        payload = jwt.decode(
            create_preview_token("abc123"),
            config.settings.PREVIEW_SECRET,
            algorithms=[config.settings.JWT_ALGORITHM],
        )
        assert payload["sub"] == "abc123"
        assert payload["typ"] == "preview"
        assert payload["exp"] > payload["iat"]

    def test_expired_token(self):
        """Expired token → no session."""
        now = datetime.now(UTC)
        token = sign({"sub": "abc", "typ": "preview", "iat": now - timedelta(hours=2), "exp": now - timedelta(hours=1)})
        assert decode_preview_token(token) is None

    def test_wrong_secret(self):
        """Token signed with another key → no session."""
        now = datetime.now(UTC)
        token = sign(
            {"sub": "abc", "typ": "preview", "iat": now, "exp": now + timedelta(hours=1)},
            secret="some-other-secret-that-is-long-enough",
        )
        assert decode_preview_token(token) is None

    def test_wrong_type(self):
        """A token minted for something else is not a preview session."""
        now = datetime.now(UTC)
        token = sign({"sub": "abc", "typ": "session", "iat": now, "exp": now + timedelta(hours=1)})
        assert decode_preview_token(token) is None

    def test_missing_claims(self):
        token = sign({"typ": "preview"})
        assert decode_preview_token(token) is None

    def test_garbage(self):
        assert decode_preview_token("garbage") is None


class TestCookies:
    """enter_preview / exit_preview set and clear the cookie."""

    def test_enter_sets_cookie(self):
        response = Response()
        enter_preview(response, "abc123")

        header = response.headers["set-cookie"]
        assert header.startswith(f"{config.settings.PREVIEW_COOKIE}=")
        assert "HttpOnly" in header
        assert "SameSite=lax" in header
        assert f"Max-Age={config.settings.PREVIEW_SESSION_HOURS * 3600}" in header

    def test_exit_expires_cookie(self):
        response = Response()
        exit_preview(response)
        assert "Max-Age=0" in response.headers["set-cookie"]

    async def test_dependency_without_cookie(self):
        assert await get_preview_session(None) is None

    async def test_dependency_with_cookie(self):
        session = await get_preview_session(create_preview_token("xyz"))
        assert session.snapshot_id == "xyz"
