"""
Pydantic models for the preview backend.

All request/response shapes defined here. No imports from routes or services.
"""

from backend.models.snapshot import FieldEditIn, SaveResponse

__all__ = [
    "FieldEditIn",
    "SaveResponse",
]
