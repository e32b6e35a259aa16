"""Checklist extraction from meeting notes, and write-back of completed items."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from bs4 import ParserRejectedMarkup

from action_items.extraction.models import ChecklistItem, CompletionOutcome
from action_items.extraction.parsers import mark_checked, normalize_item_text, parse_checkboxes
from action_items.notes.models import Note, NoteStore, NoteStoreError

if TYPE_CHECKING:
    from action_items.widget.host import Notifier

logger = logging.getLogger(__name__)

COMPLETED_MESSAGE = "Action item marked as complete! ✓"
FAILED_MESSAGE = "Failed to update the note. Please try again."


def meeting_date_for(note: Note) -> str | None:
    """The ``#startDate`` label when set, otherwise the note's modification time."""
    return note.get_label_value("startDate") or note.date_modified


def extract_from_note(note: Note, content: str) -> list[ChecklistItem]:
    """Extract unchecked, non-empty checklist items from one note's markup.

    Checked boxes are dropped *before* numbering, so ``checkbox_index``
    counts unchecked boxes only. Boxes whose label is empty still take an
    index; they just produce no item.
    """
    unchecked = [cb for cb in parse_checkboxes(content) if not cb.checked]
    meeting_date = meeting_date_for(note)

    items: list[ChecklistItem] = []
    for index, checkbox in enumerate(unchecked):
        text = normalize_item_text(checkbox.text)
        if text is None:
            continue
        items.append(
            ChecklistItem(
                note_id=note.note_id,
                note_title=note.title,
                meeting_date=meeting_date,
                date_created=note.date_created,
                date_modified=note.date_modified,
                text=text,
                checkbox_index=index,
            )
        )
    return items


def load_checklist_items(store: NoteStore, query: str) -> list[ChecklistItem]:
    """Run *query* and extract checklist items from every matching note.

    Notes are processed one at a time in search order. A note that fails to
    load or parse is logged and skipped; a failing search raises ``NoteStoreError``.

    Args:
        store: The note store to search and read.
        query: A Trilium search expression (see ``build_search_query``).

    Returns:
        Items in search order, then document order within each note.
    """
    logger.info("Final search query: %s", query)
    refs = store.search_notes(query)
    logger.debug("Found %d notes to process", len(refs))

    items: list[ChecklistItem] = []
    for ref in refs:
        try:
            note = store.get_note(ref.note_id)
            content = store.get_note_content(ref.note_id)
            items.extend(extract_from_note(note, content))
        except (NoteStoreError, ParserRejectedMarkup):
            logger.exception("Skipping note %s: failed to load", ref.note_id)

    return items


def complete_item(
    store: NoteStore,
    notifier: Notifier,
    note_id: str,
    checkbox_index: int,
) -> CompletionOutcome:
    """Check the *checkbox_index*-th unchecked checkbox of a note and save it.

    The content is always re-fetched, never cached. An index that is no
    longer in range is treated as nothing to do. Store and parse failures
    are reported through *notifier* and never raised.
    """
    try:
        content = store.get_note_content(note_id)
        updated = mark_checked(content, checkbox_index)
        if updated is None:
            logger.info(
                "Checkbox %d of note %s is no longer unchecked; nothing to do",
                checkbox_index,
                note_id,
            )
            return CompletionOutcome.NOTHING_TO_DO
        store.set_note_content(note_id, updated)
    except (NoteStoreError, ParserRejectedMarkup):
        logger.exception("Error marking item %d of note %s as complete", checkbox_index, note_id)
        notifier.show_error(FAILED_MESSAGE)
        return CompletionOutcome.FAILED

    notifier.show_message(COMPLETED_MESSAGE)
    return CompletionOutcome.COMPLETED
