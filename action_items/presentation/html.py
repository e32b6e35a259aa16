"""HTML rendering of the dashboard display tree."""

from __future__ import annotations

from html import escape

from action_items.presentation.assets import DASHBOARD_CSS, DASHBOARD_JS
from action_items.presentation.view import DashboardView, GroupView, ItemRow

ALL_COMPLETE_MESSAGE = "🎉 All action items completed!"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def count_summary(view: DashboardView) -> str:
    """Header text, e.g. ``(3 unchecked items from 1 meeting)``."""
    return (
        f"({_plural(view.total_items, 'unchecked item')} "
        f"from {_plural(view.total_groups, 'meeting')})"
    )


def note_href(note_url_base: str, note_id: str) -> str:
    return f"{note_url_base.rstrip('/')}/#root/{note_id}" if note_url_base else f"#root/{note_id}"


def _refresh_button() -> str:
    return '<button type="button" class="refreshActionItems">🔄 Refresh</button>'


def _render_row(row: ItemRow) -> str:
    item = row.item
    note_id = escape(item.note_id)
    return (
        f'<div class="action-item-row" data-note-id="{note_id}" '
        f'data-checkbox-index="{item.checkbox_index}" data-state="{row.state.value}">'
        f'<input type="checkbox" class="action-item-checkbox" data-note-id="{note_id}" '
        f'data-checkbox-index="{item.checkbox_index}">'
        f'<span class="action-item-text">{escape(item.text)}</span>'
        "</div>"
    )


def _render_group(group: GroupView, note_url_base: str) -> str:
    note_id = escape(group.note_id)
    css_class = "accordion-group" if group.expanded else "accordion-group is-collapsed"
    rows = "".join(_render_row(r) for r in group.rows)
    return (
        f'<div class="{css_class}" data-note-id="{note_id}">'
        '<div class="accordion-header">'
        '<span class="accordion-toggle">▼</span>'
        f'<a href="{escape(note_href(note_url_base, group.note_id))}" class="note-link" '
        f'data-note-id="{note_id}">{escape(group.note_title)}</a>'
        f'<span class="item-count-badge">{len(group.rows)}</span>'
        f'<span class="meeting-date">{escape(group.date_label)}</span>'
        "</div>"
        f'<div class="accordion-content">{rows}</div>'
        "</div>"
    )


def _render_all_complete(additional_criteria: str) -> str:
    criteria = ""
    if additional_criteria:
        criteria = (
            '<p class="criteria">No items found matching: '
            f"<code>{escape(additional_criteria)}</code></p>"
        )
    return f'<div class="all-complete"><p>{ALL_COMPLETE_MESSAGE}</p>{criteria}</div>'


def render_dashboard(view: DashboardView) -> str:
    """Render the widget fragment: header, accordion (or completion message), footer."""
    if view.total_items == 0:
        body = _render_all_complete(view.additional_criteria)
    else:
        groups = "".join(_render_group(g, view.note_url_base) for g in view.groups)
        body = f'<div class="action-items-accordion">{groups}</div>'

    return (
        '<div class="action-items-widget">'
        '<div class="action-items-top">'
        "<h3>📋 Meeting Action Items "
        f'<span class="item-count-summary">{count_summary(view)}</span></h3>'
        f"{_refresh_button()}"
        "</div>"
        f"{body}"
        '<div class="action-items-bottom">'
        "<span>Click meeting titles to open notes</span>"
        f"{_refresh_button()}"
        "</div>"
        "</div>"
    )


def render_page(fragment: str, title: str = "Meeting Action Items") -> str:
    """Wrap a rendered fragment into a standalone page with its CSS and JS."""
    return (
        "<!DOCTYPE html>"
        '<html lang="en"><head><meta charset="utf-8">'
        f"<title>{escape(title)}</title>"
        f"<style>{DASHBOARD_CSS}</style>"
        "</head><body>"
        f'<div id="action-items-root">{fragment}</div>'
        f"<script>{DASHBOARD_JS}</script>"
        "</body></html>"
    )
