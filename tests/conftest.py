"""Shared fixtures: an in-memory note store standing in for Trilium."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from action_items.notes.models import Note, NoteRef, NoteStoreError
from action_items.widget.host import BufferSurface, CollectingNotifier

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


def todo(text: str, checked: bool = False, item_id: str = "x") -> str:
    """A CKEditor 5 todo-list entry as Trilium stores it."""
    checked_attr = ' checked="checked"' if checked else ""
    return (
        f'<li data-list-item-id="{item_id}"><label class="todo-list__label">'
        f'<input type="checkbox"{checked_attr} disabled="disabled">'
        f'<span class="todo-list__label__description">{text}</span></label></li>'
    )


def todo_list(*entries: str) -> str:
    return f'<ul class="todo-list">{"".join(entries)}</ul>'


class FakeNoteStore:
    """NoteStore keeping notes in dicts; search returns notes in insertion order."""

    def __init__(self) -> None:
        self.notes: dict[str, Note] = {}
        self.contents: dict[str, str] = {}
        self.searchable: list[str] = []
        self.queries: list[str] = []
        self.saved: list[tuple[str, str]] = []
        self.broken: set[str] = set()
        self.fail_writes = False

    def add(
        self,
        note_id: str,
        title: str,
        content: str = "",
        labels: dict[str, str] | None = None,
        date_modified: str | None = "2025-06-10 09:00:00.000+0000",
        searchable: bool = True,
    ) -> Note:
        note = Note(
            note_id=note_id,
            title=title,
            date_created="2025-06-01 09:00:00.000+0000",
            date_modified=date_modified,
            labels=labels or {},
        )
        self.notes[note_id] = note
        self.contents[note_id] = content
        if searchable:
            self.searchable.append(note_id)
        return note

    def search_notes(self, query: str) -> list[NoteRef]:
        self.queries.append(query)
        return [NoteRef(note_id=n, title=self.notes[n].title) for n in self.searchable]

    def get_note(self, note_id: str) -> Note:
        if note_id in self.broken or note_id not in self.notes:
            raise NoteStoreError(f"GET /notes/{note_id} failed with status 404")
        return self.notes[note_id]

    def get_note_content(self, note_id: str) -> str:
        if note_id in self.broken or note_id not in self.contents:
            raise NoteStoreError(f"GET /notes/{note_id}/content failed with status 404")
        return self.contents[note_id]

    def set_note_content(self, note_id: str, content: str) -> None:
        if self.fail_writes:
            raise NoteStoreError(f"PUT /notes/{note_id}/content failed with status 500")
        self.contents[note_id] = content
        self.saved.append((note_id, content))


@pytest.fixture
def store() -> FakeNoteStore:
    return FakeNoteStore()


@pytest.fixture
def surface() -> BufferSurface:
    return BufferSurface()


@pytest.fixture
def notifier() -> CollectingNotifier:
    return CollectingNotifier()
