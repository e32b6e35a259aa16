"""Dashboard controller: runs the load pipeline and applies user interactions."""

from __future__ import annotations

import dataclasses
import logging
import threading
from collections.abc import Callable
from datetime import datetime

from action_items.dashboard_config import DEFAULT_TEMPLATE_TITLE, DashboardConfig
from action_items.extraction.extractor import complete_item, load_checklist_items
from action_items.extraction.models import CompletionOutcome
from action_items.extraction.query import build_search_query
from action_items.notes.models import NoteStore
from action_items.presentation.html import note_href, render_dashboard
from action_items.presentation.view import DashboardView, GroupView, ItemRow, RowState, build_view
from action_items.widget.host import Notifier, RenderSurface

logger = logging.getLogger(__name__)


class DashboardController:
    """Owns the display tree and every mutation of it.

    The dashboard config and the render surface are passed in explicitly;
    nothing is looked up from ambient state. Each load reads the dashboard
    note's labels again, so label edits apply on the next refresh.
    """

    def __init__(
        self,
        store: NoteStore,
        surface: RenderSurface | None,
        notifier: Notifier,
        dashboard_note_id: str = "",
        default_template: str = DEFAULT_TEMPLATE_TITLE,
        note_url_base: str = "",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.store = store
        self.surface = surface
        self.notifier = notifier
        self.dashboard_note_id = dashboard_note_id
        self.default_template = default_template
        self.note_url_base = note_url_base
        self.view: DashboardView | None = None
        self._clock = clock
        self._loading = threading.Lock()

    # -- loading ------------------------------------------------------------

    def read_config(self) -> DashboardConfig:
        source = self.store.get_note(self.dashboard_note_id) if self.dashboard_note_id else None
        return DashboardConfig.from_labels(source, self.default_template)

    def render(self) -> None:
        """Load everything and draw the dashboard. No-op without a surface."""
        self.refresh()

    def refresh(self) -> bool:
        """Re-run the full pipeline and replace the display tree.

        Returns False when skipped: no surface attached, or a load is already
        in flight. Search failures propagate as ``NoteStoreError``.
        """
        if self.surface is None:
            logger.debug("No render surface attached; skipping render")
            return False

        if not self._loading.acquire(blocking=False):
            logger.info("Refresh ignored: a load is already in progress")
            return False
        try:
            config = self.read_config()
            items = load_checklist_items(self.store, build_search_query(config))
            now = self._clock() if self._clock else None
            self.view = build_view(
                items,
                additional_criteria=config.additional_criteria,
                note_url_base=self.note_url_base,
                now=now,
            )
        finally:
            self._loading.release()

        logger.info(
            "Loaded %d action items from %d notes",
            self.view.total_items,
            self.view.total_groups,
        )
        self._draw()
        return True

    @property
    def is_loading(self) -> bool:
        return self._loading.locked()

    # -- events -------------------------------------------------------------

    def note_link(self, note_id: str) -> str:
        """Navigation target for a group title; opening it is left to the host."""
        return note_href(self.note_url_base, note_id)

    def on_header_click(self, note_id: str, on_title_link: bool = False) -> bool:
        """Toggle a group between expanded and collapsed.

        Clicks that land on the title link are ignored so the link can
        navigate without collapsing the group.
        """
        if on_title_link or self.view is None:
            return False
        group = self.view.find_group(note_id)
        if group is None:
            return False

        group.expanded = not group.expanded
        self._draw()
        return True

    def on_checkbox_change(
        self,
        note_id: str,
        checkbox_index: int,
        checked: bool = True,
    ) -> CompletionOutcome | None:
        """Complete an item: write it back, then patch the tree locally.

        Returns None when the event does not map to a displayed row.
        On failure the row stays, with its checkbox re-rendered unchecked.
        """
        view = self.view
        if not checked or view is None:
            return None
        group = view.find_group(note_id)
        row = group.find_row(checkbox_index) if group else None
        if group is None or row is None:
            logger.debug("No row for note %s checkbox %d", note_id, checkbox_index)
            return None

        row.state = RowState.COMPLETING
        outcome = complete_item(self.store, self.notifier, note_id, checkbox_index)

        if outcome is CompletionOutcome.FAILED:
            row.state = RowState.VISIBLE
        else:
            self._remove_row(view, group, row)
            if outcome is CompletionOutcome.COMPLETED:
                _shift_indices_after(group, checkbox_index)

        self._draw()
        return outcome

    # -- helpers ------------------------------------------------------------

    def _remove_row(self, view: DashboardView, group: GroupView, row: ItemRow) -> None:
        row.state = RowState.REMOVED
        group.rows.remove(row)
        if not group.rows:
            view.groups.remove(group)

    def _draw(self) -> None:
        if self.surface is not None and self.view is not None:
            self.surface.html(render_dashboard(self.view))


def _shift_indices_after(group: GroupView, checkbox_index: int) -> None:
    # The checked box left the unchecked sequence, so later boxes moved up one.
    for row in group.rows:
        if row.item.checkbox_index > checkbox_index:
            row.item = dataclasses.replace(row.item, checkbox_index=row.item.checkbox_index - 1)
