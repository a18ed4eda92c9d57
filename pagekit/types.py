"""
Pagekit: Shared Types

Data classes used across the field registry, capture, store, resolver and
renderer. These are the contracts that bind the kernel together.

- FieldEdit: one (region id, replacement text) pair
- Snapshot: an immutable, identified set of field edits
- Region / BaseContent: the canonical page content and its editable regions
- RenderContext: per-request preview state handed to the renderer
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

# ---------------------------------------------------------------------------
# Snapshot data
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FieldEdit:
    """A single captured region: its id and the text the operator left in it."""

    id: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "text": self.text}


@dataclass(frozen=True)
class Snapshot:
    """
    A published set of field edits.

    The id is generated by the store; snapshots are never updated in place.
    """

    id: str
    edits: tuple[FieldEdit, ...] = ()

    def overlay(self) -> dict[str, str]:
        """
        Resolve the edits into an id → text mapping.

        Duplicate ids are a template-authoring error; if one slips through,
        the last edit wins.
        """
        return {edit.id: edit.text for edit in self.edits}


@dataclass(frozen=True)
class PreviewSession:
    """A viewer's binding to one snapshot id, decoded from a signed token."""

    snapshot_id: str
    issued_at: datetime


# ---------------------------------------------------------------------------
# Base content
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Region:
    """
    An editable area of the base content.

    `html` is trusted template markup (it may contain links). Overlay text
    replacing it is always escaped.
    """

    id: str
    tag: str
    html: str


@dataclass
class BaseContent:
    """
    Canonical page content.

    `layout` is a mustache template; each region is placed with
    {{{regions.<id>}}}.
    """

    title: str
    layout: str
    regions: list[Region] = field(default_factory=list)
    description: str = ""

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for region in self.regions:
            if region.id in seen:
                raise ValueError(f"Duplicate region id in base content: {region.id!r}")
            seen.add(region.id)

    @property
    def region_ids(self) -> list[str]:
        return [r.id for r in self.regions]


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class RenderError:
    """A preview that could not be resolved. Rendered as a full error page."""

    message: str
    is_recoverable: bool


@dataclass(frozen=True)
class RenderContext:
    """Computed fresh for each request. Never persisted."""

    is_preview: bool = False
    snapshot_id: str | None = None
    overlay: Snapshot | None = None
    error: RenderError | None = None

    @classmethod
    def canonical(cls) -> RenderContext:
        return cls()


@dataclass
class RenderOptions:
    edit_mode: bool = False
    exit_url: str = "/api/exit"
    container_id: str = "content"
