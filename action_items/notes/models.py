"""Data models and the storage interface for Trilium notes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


@dataclass
class NoteRef:
    """A search hit: just enough to fetch the full note."""

    note_id: str
    title: str = ""


@dataclass
class Note:
    """Uniform representation of a note's metadata (content is fetched separately)."""

    note_id: str
    title: str
    date_created: str | None = None
    date_modified: str | None = None
    labels: dict[str, str] = field(default_factory=dict)

    def get_label_value(self, name: str) -> str | None:
        return self.labels.get(name)

    @classmethod
    def from_etapi(cls, data: dict[str, Any]) -> Note:
        """Build a Note from an ETAPI note object.

        Only ``label`` attributes are kept; for repeated labels the first wins,
        matching Trilium's own ``getLabelValue``.
        """
        labels: dict[str, str] = {}
        for attr in data.get("attributes") or []:
            if attr.get("type") != "label":
                continue
            labels.setdefault(attr["name"], attr.get("value") or "")

        return cls(
            note_id=data["noteId"],
            title=data.get("title", ""),
            date_created=data.get("dateCreated"),
            date_modified=data.get("dateModified"),
            labels=labels,
        )


class NoteStoreError(Exception):
    """Raised when the note store cannot be reached or rejects a request."""


class NoteStore(Protocol):
    """Read/write capabilities the dashboard needs from the host store."""

    def search_notes(self, query: str) -> list[NoteRef]: ...

    def get_note(self, note_id: str) -> Note: ...

    def get_note_content(self, note_id: str) -> str: ...

    def set_note_content(self, note_id: str, content: str) -> None: ...
