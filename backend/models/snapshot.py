"""Snapshot models for the save endpoint."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from backend.config import settings
from pagekit.types import FieldEdit


class FieldEditIn(BaseModel):
    """One captured region as sent by the editor."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(min_length=1, max_length=100)
    # Older editors sent the browser's property name
    text: str = Field(
        max_length=settings.MAX_FIELD_TEXT_LENGTH,
        validation_alias=AliasChoices("text", "innerText"),
    )

    def to_edit(self) -> FieldEdit:
        return FieldEdit(id=self.id, text=self.text)


class SaveResponse(BaseModel):
    """What the save endpoint returns."""

    snapshot_id: str
