"""httpx client for the Trilium ETAPI (search, note metadata, note content)."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from action_items.config import settings
from action_items.notes.models import Note, NoteRef, NoteStoreError

logger = logging.getLogger(__name__)


class TriliumClient:
    """NoteStore backed by Trilium's external REST API.

    Every transport or HTTP-status failure is re-raised as ``NoteStoreError``
    so callers only deal with one exception type.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=f"{base_url.rstrip('/')}/etapi",
            headers={"Authorization": token},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            r = self._client.request(method, path, **kwargs)
            r.raise_for_status()
        except httpx.HTTPStatusError as e:
            msg = f"{method} {path} failed with status {e.response.status_code}"
            raise NoteStoreError(msg) from e
        except httpx.HTTPError as e:
            raise NoteStoreError(f"{method} {path} failed: {e}") from e
        return r

    def search_notes(self, query: str) -> list[NoteRef]:
        r = self._request("GET", "/notes", params={"search": query})
        results = r.json().get("results", [])
        return [NoteRef(note_id=n["noteId"], title=n.get("title", "")) for n in results]

    def get_note(self, note_id: str) -> Note:
        r = self._request("GET", f"/notes/{note_id}")
        return Note.from_etapi(r.json())

    def get_note_content(self, note_id: str) -> str:
        return self._request("GET", f"/notes/{note_id}/content").text

    def set_note_content(self, note_id: str, content: str) -> None:
        self._request(
            "PUT",
            f"/notes/{note_id}/content",
            content=content.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )
        logger.debug("Saved content for note %s (%d chars)", note_id, len(content))


def get_note_store() -> TriliumClient:
    """Create and return a Trilium client from settings."""
    return TriliumClient(
        settings.trilium_url,
        settings.trilium_token,
        timeout=settings.request_timeout,
    )
