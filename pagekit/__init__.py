"""
Pagekit: the edit/preview kernel.

Components:
  fields   : editable field registry over a rendered page
  capture  : rendered page → list[FieldEdit]  (pure)
  store    : snapshot persistence over a blob backend (IO)
  resolve  : preview snapshot id → RenderContext (IO via the store)
  renderer : (base content, context) → HTML  (pure, deterministic)
"""

from pagekit.capture import capture
from pagekit.fields import FieldRegistry
from pagekit.renderer import render
from pagekit.resolve import resolve_render_context
from pagekit.store import MemoryBlobStorage, SnapshotStore
from pagekit.types import BaseContent, FieldEdit, Region, RenderContext, Snapshot

__all__ = [
    "capture",
    "render",
    "resolve_render_context",
    "FieldRegistry",
    "SnapshotStore",
    "MemoryBlobStorage",
    "BaseContent",
    "FieldEdit",
    "Region",
    "RenderContext",
    "Snapshot",
]
