"""End-to-end tests for the dashboard controller against an in-memory note store."""

from __future__ import annotations

import pytest
from conftest import NOW, FakeNoteStore, todo, todo_list

from action_items.extraction.models import CompletionOutcome
from action_items.extraction.parsers import parse_checkboxes
from action_items.presentation.html import ALL_COMPLETE_MESSAGE
from action_items.presentation.view import RowState
from action_items.widget.controller import DashboardController
from action_items.widget.host import BufferSurface, CollectingNotifier


def _controller(
    store: FakeNoteStore,
    surface: BufferSurface | None,
    notifier: CollectingNotifier,
    dashboard_note_id: str = "",
) -> DashboardController:
    return DashboardController(
        store=store,
        surface=surface,
        notifier=notifier,
        dashboard_note_id=dashboard_note_id,
        clock=lambda: NOW,
    )


@pytest.fixture
def loaded(
    store: FakeNoteStore, surface: BufferSurface, notifier: CollectingNotifier
) -> DashboardController:
    store.add(
        "older",
        "Kickoff",
        todo_list(todo("Old item")),
        labels={"startDate": "2025-05-01"},
    )
    store.add(
        "newer",
        "Standup",
        todo_list(todo("Done", checked=True), todo("First"), todo("Second"), todo("Third")),
        labels={"startDate": "2025-06-14"},
    )
    controller = _controller(store, surface, notifier)
    controller.render()
    return controller


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class TestRender:
    def test_no_surface_is_noop(self, store: FakeNoteStore, notifier: CollectingNotifier) -> None:
        controller = _controller(store, None, notifier)
        controller.render()
        assert controller.view is None
        assert store.queries == []

    def test_render_populates_surface(
        self, loaded: DashboardController, surface: BufferSurface
    ) -> None:
        assert loaded.view is not None
        assert [g.note_id for g in loaded.view.groups] == ["newer", "older"]
        assert loaded.view.total_items == 4
        assert "(4 unchecked items from 2 meetings)" in surface.markup
        assert "Yesterday" in surface.markup

    def test_reads_dashboard_labels_on_every_load(
        self, store: FakeNoteStore, surface: BufferSurface, notifier: CollectingNotifier
    ) -> None:
        dashboard = store.add(
            "dash",
            "2025 Action Items",
            labels={"template": "_projectTemplate", "additionalCriteria": '"#year=2025"'},
            searchable=False,
        )
        controller = _controller(store, surface, notifier, dashboard_note_id="dash")

        controller.render()
        dashboard.labels["additionalCriteria"] = "#priority=high or #important"
        controller.refresh()

        assert '~template.title="_projectTemplate"' in store.queries[0]
        assert store.queries[0].endswith(" and #year=2025")
        assert store.queries[1].endswith(" and (#priority=high or #important)")

    def test_empty_result_shows_completion_with_criteria(
        self, store: FakeNoteStore, surface: BufferSurface, notifier: CollectingNotifier
    ) -> None:
        store.add("dash", "Dash", labels={"additionalCriteria": "#year=2030"}, searchable=False)
        controller = _controller(store, surface, notifier, dashboard_note_id="dash")
        controller.render()
        assert ALL_COMPLETE_MESSAGE in surface.markup
        assert "#year=2030" in surface.markup

    def test_refresh_replaces_tree(self, loaded: DashboardController, store: FakeNoteStore) -> None:
        assert loaded.view is not None
        loaded.view.groups[0].expanded = False
        store.contents["older"] = todo_list(todo("Old item"), todo("New item"))

        assert loaded.refresh() is True

        assert loaded.view.total_items == 5
        assert all(g.expanded for g in loaded.view.groups)

    def test_overlapping_refresh_is_ignored(
        self, loaded: DashboardController, store: FakeNoteStore
    ) -> None:
        queries_before = len(store.queries)
        loaded._loading.acquire()
        try:
            assert loaded.is_loading
            assert loaded.refresh() is False
        finally:
            loaded._loading.release()
        assert len(store.queries) == queries_before


# ---------------------------------------------------------------------------
# Accordion
# ---------------------------------------------------------------------------


class TestHeaderClick:
    def test_toggles_collapsed_and_back(
        self, loaded: DashboardController, surface: BufferSurface
    ) -> None:
        assert loaded.on_header_click("newer") is True
        assert 'class="accordion-group is-collapsed" data-note-id="newer"' in surface.markup
        assert loaded.on_header_click("newer") is True
        assert 'class="accordion-group" data-note-id="newer"' in surface.markup

    def test_title_link_click_does_not_toggle(self, loaded: DashboardController) -> None:
        assert loaded.on_header_click("newer", on_title_link=True) is False
        assert loaded.view is not None
        assert loaded.view.groups[0].expanded is True

    def test_unknown_group(self, loaded: DashboardController) -> None:
        assert loaded.on_header_click("nope") is False

    def test_note_link(self, loaded: DashboardController) -> None:
        assert loaded.note_link("newer") == "#root/newer"


# ---------------------------------------------------------------------------
# Completing items
# ---------------------------------------------------------------------------


class TestCheckboxChange:
    def test_completing_removes_row_and_updates_counts(
        self,
        loaded: DashboardController,
        store: FakeNoteStore,
        surface: BufferSurface,
        notifier: CollectingNotifier,
    ) -> None:
        outcome = loaded.on_checkbox_change("newer", 0)

        assert outcome is CompletionOutcome.COMPLETED
        assert loaded.view is not None
        group = loaded.view.find_group("newer")
        assert group is not None
        assert [r.item.text for r in group.rows] == ["Second", "Third"]
        assert '<span class="item-count-badge">2</span>' in surface.markup
        assert "(3 unchecked items from 2 meetings)" in surface.markup
        assert [b.checked for b in parse_checkboxes(store.contents["newer"])] == [
            True,
            True,
            False,
            False,
        ]
        assert notifier.messages == ["Action item marked as complete! ✓"]

    def test_later_rows_still_address_their_own_checkbox(
        self, loaded: DashboardController, store: FakeNoteStore
    ) -> None:
        loaded.on_checkbox_change("newer", 0)
        assert loaded.view is not None
        group = loaded.view.find_group("newer")
        assert group is not None
        third = group.rows[1]
        assert third.item.text == "Third"

        loaded.on_checkbox_change("newer", third.item.checkbox_index)

        boxes = parse_checkboxes(store.contents["newer"])
        assert [(b.text, b.checked) for b in boxes] == [
            ("Done", True),
            ("First", True),
            ("Second", False),
            ("Third", True),
        ]

    def test_last_item_removes_group(
        self, loaded: DashboardController, surface: BufferSurface
    ) -> None:
        loaded.on_checkbox_change("older", 0)
        assert loaded.view is not None
        assert loaded.view.find_group("older") is None
        assert 'data-note-id="older"' not in surface.markup
        assert "(3 unchecked items from 1 meeting)" in surface.markup

    def test_last_item_overall_shows_completion(
        self, store: FakeNoteStore, surface: BufferSurface, notifier: CollectingNotifier
    ) -> None:
        store.add("only", "Retro", todo_list(todo("Last one")))
        controller = _controller(store, surface, notifier)
        controller.render()

        controller.on_checkbox_change("only", 0)

        assert controller.view is not None
        assert controller.view.total_items == 0
        assert controller.view.groups == []
        assert "(0 unchecked items from 0 meetings)" in surface.markup
        assert ALL_COMPLETE_MESSAGE in surface.markup

    def test_failure_keeps_row(
        self,
        loaded: DashboardController,
        store: FakeNoteStore,
        surface: BufferSurface,
        notifier: CollectingNotifier,
    ) -> None:
        store.fail_writes = True

        outcome = loaded.on_checkbox_change("newer", 1)

        assert outcome is CompletionOutcome.FAILED
        assert loaded.view is not None
        group = loaded.view.find_group("newer")
        assert group is not None
        row = group.find_row(1)
        assert row is not None
        assert row.state is RowState.VISIBLE
        assert loaded.view.total_items == 4
        assert 'data-checkbox-index="1" data-state="visible"' in surface.markup
        assert notifier.errors == ["Failed to update the note. Please try again."]

    def test_already_checked_elsewhere_drops_stale_row(
        self, loaded: DashboardController, store: FakeNoteStore
    ) -> None:
        store.contents["older"] = todo_list(todo("Old item", checked=True))

        outcome = loaded.on_checkbox_change("older", 0)

        assert outcome is CompletionOutcome.NOTHING_TO_DO
        assert loaded.view is not None
        assert loaded.view.find_group("older") is None
        assert store.saved == []

    def test_uncheck_event_ignored(self, loaded: DashboardController, store: FakeNoteStore) -> None:
        assert loaded.on_checkbox_change("newer", 0, checked=False) is None
        assert store.saved == []

    def test_unknown_row_ignored(self, loaded: DashboardController, store: FakeNoteStore) -> None:
        assert loaded.on_checkbox_change("newer", 42) is None
        assert loaded.on_checkbox_change("nope", 0) is None
        assert store.saved == []
