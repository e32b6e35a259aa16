"""Data models for checklist extraction results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class ParsedCheckbox:
    """One checkbox found in note markup, in document order."""

    checked: bool
    text: str


@dataclass
class ChecklistItem:
    """A single unchecked checklist entry from a meeting note.

    ``checkbox_index`` is the position among the note's *unchecked*
    checkboxes at extraction time; it is the address used for write-back.
    """

    note_id: str
    note_title: str
    meeting_date: str | None
    date_created: str | None
    date_modified: str | None
    text: str
    checkbox_index: int


class CompletionOutcome(str, Enum):
    """Result of marking a checklist item complete in its source note."""

    COMPLETED = "completed"
    NOTHING_TO_DO = "nothing_to_do"  # index no longer among the unchecked boxes
    FAILED = "failed"
