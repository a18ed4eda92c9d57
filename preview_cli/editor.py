"""
Editor session: edit mode, sharing, and the dialogs layered over the page.

One session per page being edited. Only one save may be in flight at a
time; further share triggers are ignored until it settles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from pagekit.capture import capture
from pagekit.fields import FieldRegistry
from preview_cli.client import ApiClient, SaveFailed

SAVE_ERROR_BODY = "An error occurred while saving your snapshot. Please try again in a bit."


@dataclass(frozen=True)
class Dialog:
    kind: Literal["share", "error"]
    title: str
    body: str
    detail: str | None = None


class EditorSession:
    """Client-side state for editing and sharing one page."""

    def __init__(self, client: ApiClient, registry: FieldRegistry | None = None) -> None:
        self.client = client
        self.registry = registry
        self.snapshot_id: str | None = None
        self.error: SaveFailed | None = None
        self._save_in_flight = False

    async def load(self) -> FieldRegistry:
        """Fetch the page and build its field registry."""
        html = await self.client.fetch_page()
        self.registry = FieldRegistry.from_html(html)
        return self.registry

    @property
    def is_edit(self) -> bool:
        return self.registry is not None and self.registry.edit_mode

    @property
    def is_sharing(self) -> bool:
        """Busy indicator: a save request is in flight."""
        return self._save_in_flight

    def toggle_edit(self) -> bool:
        if self.registry is None:
            raise RuntimeError("No page loaded")
        self.registry.set_edit_mode(not self.registry.edit_mode)
        return self.registry.edit_mode

    async def share(self) -> bool:
        """
        Capture the editable regions and save them as a snapshot.

        Returns False without doing anything when a save is already in
        flight. Otherwise the outcome lands in `snapshot_id` (share-link
        dialog) or `error` (error dialog).
        """
        if self._save_in_flight:
            return False
        if self.registry is None:
            raise RuntimeError("No page loaded")

        # Set before the first await so a second trigger is suppressed
        self._save_in_flight = True
        try:
            edits = capture(self.registry)
            self.snapshot_id = await self.client.save(edits)
            self.error = None
        except SaveFailed as e:
            self.snapshot_id = None
            self.error = e
        finally:
            self._save_in_flight = False
        return True

    @property
    def share_url(self) -> str | None:
        if self.snapshot_id is None:
            return None
        return self.client.share_url(self.snapshot_id)

    def clear_snapshot(self) -> None:
        """Dismiss the share-link dialog. The snapshot itself is kept."""
        self.snapshot_id = None

    def clear_error(self) -> None:
        """Dismiss the error dialog without retrying."""
        self.error = None

    def dialogs(self) -> list[Dialog]:
        shown: list[Dialog] = []
        if self.error is not None:
            shown.append(Dialog(kind="error", title="Error", body=SAVE_ERROR_BODY, detail=str(self.error)))
        if self.share_url is not None:
            shown.append(Dialog(kind="share", title="Share this preview", body=self.share_url))
        return shown
