"""Grouping, sorting, and the mutable display tree for the dashboard."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from action_items.extraction.models import ChecklistItem
from action_items.presentation.dates import format_relative_date, parse_timestamp


class RowState(str, Enum):
    """Lifecycle of an item row: visible -> completing -> removed."""

    VISIBLE = "visible"
    COMPLETING = "completing"
    REMOVED = "removed"


@dataclass
class DisplayGroup:
    """All checklist items from one note, in extraction order."""

    note_id: str
    note_title: str
    meeting_date: str | None
    items: list[ChecklistItem] = field(default_factory=list)


@dataclass
class ItemRow:
    item: ChecklistItem
    state: RowState = RowState.VISIBLE


@dataclass
class GroupView:
    """A rendered accordion group; ``rows`` holds rows not yet removed."""

    note_id: str
    note_title: str
    meeting_date: str | None
    date_label: str
    rows: list[ItemRow]
    expanded: bool = True

    def find_row(self, checkbox_index: int) -> ItemRow | None:
        for row in self.rows:
            if row.item.checkbox_index == checkbox_index:
                return row
        return None


@dataclass
class DashboardView:
    """The whole display tree. Counts are derived, never stored."""

    groups: list[GroupView]
    additional_criteria: str = ""
    note_url_base: str = ""

    @property
    def total_items(self) -> int:
        return sum(len(g.rows) for g in self.groups)

    @property
    def total_groups(self) -> int:
        return len(self.groups)

    def find_group(self, note_id: str) -> GroupView | None:
        for group in self.groups:
            if group.note_id == note_id:
                return group
        return None


def _sort_key(group: DisplayGroup) -> tuple[bool, float]:
    date = parse_timestamp(group.meeting_date)
    if date is None:
        return (True, 0.0)
    return (False, -date.timestamp())


def group_items(items: list[ChecklistItem]) -> list[DisplayGroup]:
    """Group items by note and sort groups by meeting date, newest first.

    Groups with a missing or unparseable date go last. The sort is stable,
    so ties and invalid dates keep search order.
    """
    groups: dict[str, DisplayGroup] = {}
    for item in items:
        group = groups.get(item.note_id)
        if group is None:
            group = DisplayGroup(
                note_id=item.note_id,
                note_title=item.note_title,
                meeting_date=item.meeting_date,
            )
            groups[item.note_id] = group
        group.items.append(item)

    return sorted(groups.values(), key=_sort_key)


def build_view(
    items: list[ChecklistItem],
    additional_criteria: str = "",
    note_url_base: str = "",
    now: datetime | None = None,
) -> DashboardView:
    """Turn extracted items into a fresh display tree (all groups expanded)."""
    return DashboardView(
        groups=[
            GroupView(
                note_id=g.note_id,
                note_title=g.note_title,
                meeting_date=g.meeting_date,
                date_label=format_relative_date(g.meeting_date, now=now),
                rows=[ItemRow(item=i) for i in g.items],
            )
            for g in group_items(items)
        ],
        additional_criteria=additional_criteria,
        note_url_base=note_url_base,
    )
