"""
Preview configuration: all environment variables in one place.

Read from environment at runtime. Never hardcode secrets.
"""

from __future__ import annotations

import os


class Settings:
    """Application settings from environment variables."""

    # R2 / S3 Storage
    R2_ENDPOINT: str = os.environ.get("R2_ENDPOINT", "")
    R2_ACCESS_KEY: str = os.environ.get("R2_ACCESS_KEY", "")
    R2_SECRET_KEY: str = os.environ.get("R2_SECRET_KEY", "")
    R2_SNAPSHOT_BUCKET: str = os.environ.get("R2_SNAPSHOT_BUCKET", "preview-snapshots")
    STORAGE_TIMEOUT_SECONDS: float = float(os.environ.get("STORAGE_TIMEOUT_SECONDS", "10"))

    # Preview sessions
    PREVIEW_SECRET: str = os.environ.get("PREVIEW_SECRET", "")
    JWT_ALGORITHM: str = "HS256"
    PREVIEW_SESSION_HOURS: int = int(os.environ.get("PREVIEW_SESSION_HOURS", "24"))
    PREVIEW_COOKIE: str = "preview_session"

    # Save endpoint limits
    MAX_EDITS_PER_SNAPSHOT: int = 500
    MAX_FIELD_TEXT_LENGTH: int = 10000

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")

    @property
    def SECURE_COOKIES(self) -> bool:
        return self.ENVIRONMENT != "development"


# Singleton instance
settings = Settings()

# Validate required settings (skip storage checks in test mode)
_testing = os.environ.get("TESTING", "").lower() == "true"

if not settings.PREVIEW_SECRET:
    raise RuntimeError("PREVIEW_SECRET environment variable is required")

if not _testing:
    if not settings.R2_ENDPOINT:
        raise RuntimeError("R2_ENDPOINT environment variable is required")
    if not settings.R2_ACCESS_KEY:
        raise RuntimeError("R2_ACCESS_KEY environment variable is required")
    if not settings.R2_SECRET_KEY:
        raise RuntimeError("R2_SECRET_KEY environment variable is required")
