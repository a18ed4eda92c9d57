"""HTTP client for the preview server."""

from __future__ import annotations

from collections.abc import Iterable

import httpx

from pagekit.types import FieldEdit


class SaveFailed(Exception):
    """The save endpoint could not be reached or refused the request."""
    pass


class ApiClient:
    """HTTP client for the preview server."""

    def __init__(
        self,
        api_url: str,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = api_url.rstrip("/")
        self.client = httpx.AsyncClient(base_url=self.api_url, timeout=timeout, transport=transport)

    async def fetch_page(self, edit: bool = False) -> str:
        """Fetch the rendered page. Error pages are returned as-is."""
        res = await self.client.get("/", params={"edit": "true"} if edit else None)
        return res.text

    async def save(self, edits: Iterable[FieldEdit]) -> str:
        """
        POST captured edits to /api/save.

        Returns the new snapshot id.

        Raises:
            SaveFailed: Network failure, non-success response, or a success
                response without a snapshot id. The message is the response
                body or the transport error.
        """
        payload = [edit.to_dict() for edit in edits]
        try:
            res = await self.client.post("/api/save", json=payload)
        except httpx.HTTPError as e:
            raise SaveFailed(str(e) or e.__class__.__name__) from e

        if not res.is_success:
            raise SaveFailed(res.text or f"HTTP {res.status_code}")

        try:
            snapshot_id = res.json()["snapshot_id"]
        except (ValueError, KeyError, TypeError) as e:
            raise SaveFailed(res.text or f"HTTP {res.status_code} without a snapshot id") from e
        if not isinstance(snapshot_id, str) or not snapshot_id:
            raise SaveFailed(res.text or f"HTTP {res.status_code} without a snapshot id")
        return snapshot_id

    def share_url(self, snapshot_id: str) -> str:
        return f"{self.api_url}/api/share/{snapshot_id}"

    async def close(self) -> None:
        """Close client."""
        await self.client.aclose()
