"""Dashboard endpoints: page, JSON view, refresh, accordion toggle, and completion."""

from __future__ import annotations

from functools import lru_cache
from typing import cast

from fastapi import APIRouter, HTTPException
from fastapi.responses import HTMLResponse

from action_items.api.models import (
    CompleteItemRequest,
    DashboardFragment,
    DashboardResponse,
    GroupResponse,
    ItemResponse,
)
from action_items.config import settings
from action_items.extraction.models import CompletionOutcome
from action_items.notes.client import get_note_store
from action_items.notes.models import NoteStoreError
from action_items.presentation.html import render_page
from action_items.widget.controller import DashboardController
from action_items.widget.host import BufferSurface, CollectingNotifier

router = APIRouter()

REFRESH_IN_PROGRESS = "A refresh is already in progress."


@lru_cache(maxsize=1)
def get_controller() -> DashboardController:
    """Return the process-wide controller wired to Trilium and an in-memory surface."""
    return DashboardController(
        store=get_note_store(),
        surface=BufferSurface(),
        notifier=CollectingNotifier(),
        dashboard_note_id=settings.dashboard_note_id,
        default_template=settings.default_template,
        note_url_base=settings.trilium_url,
    )


def _load(controller: DashboardController) -> bool:
    # Search and config-read failures (including bad #additionalCriteria syntax)
    # surface as a generic upstream failure.
    try:
        return controller.refresh()
    except NoteStoreError as exc:
        raise HTTPException(status_code=502, detail=f"Failed to load action items: {exc}") from exc


def _ensure_loaded(controller: DashboardController) -> None:
    if controller.view is None:
        _load(controller)


def _fragment(controller: DashboardController, completed: bool | None = None) -> DashboardFragment:
    surface = cast(BufferSurface, controller.surface)
    notifier = cast(CollectingNotifier, controller.notifier)
    messages, errors = notifier.drain()
    view = controller.view
    return DashboardFragment(
        html=surface.markup,
        total_items=view.total_items if view else 0,
        total_groups=view.total_groups if view else 0,
        completed=completed,
        messages=messages,
        errors=errors,
    )


@router.get("/", response_class=HTMLResponse)
async def dashboard_page() -> HTMLResponse:
    """Serve the standalone dashboard page, reloading every note on each request."""
    controller = get_controller()
    _load(controller)
    surface = cast(BufferSurface, controller.surface)
    return HTMLResponse(render_page(surface.markup))


@router.get("/api/dashboard", response_model=DashboardResponse)
async def get_dashboard() -> DashboardResponse:
    """Return the current display tree as JSON."""
    controller = get_controller()
    _ensure_loaded(controller)
    view = controller.view
    if view is None:
        return DashboardResponse(total_items=0, total_groups=0)

    return DashboardResponse(
        total_items=view.total_items,
        total_groups=view.total_groups,
        additional_criteria=view.additional_criteria,
        groups=[
            GroupResponse(
                note_id=g.note_id,
                note_title=g.note_title,
                note_url=controller.note_link(g.note_id),
                meeting_date=g.meeting_date,
                date_label=g.date_label,
                expanded=g.expanded,
                items=[
                    ItemResponse(
                        checkbox_index=r.item.checkbox_index,
                        text=r.item.text,
                        state=r.state.value,
                    )
                    for r in g.rows
                ],
            )
            for g in view.groups
        ],
    )


@router.post("/api/dashboard/refresh", response_model=DashboardFragment)
async def refresh_dashboard() -> DashboardFragment:
    """Reload every note and re-render the whole widget."""
    controller = get_controller()
    if not _load(controller) and controller.is_loading:
        controller.notifier.show_message(REFRESH_IN_PROGRESS)
    return _fragment(controller)


@router.post("/api/dashboard/groups/{note_id}/toggle", response_model=DashboardFragment)
async def toggle_group(note_id: str) -> DashboardFragment:
    """Expand or collapse one meeting group."""
    controller = get_controller()
    _ensure_loaded(controller)
    if not controller.on_header_click(note_id):
        raise HTTPException(status_code=404, detail="Group not found")
    return _fragment(controller)


@router.post("/api/dashboard/items/complete", response_model=DashboardFragment)
async def complete_dashboard_item(request: CompleteItemRequest) -> DashboardFragment:
    """Mark one item complete in its note and drop it from the dashboard."""
    controller = get_controller()
    _ensure_loaded(controller)
    outcome = controller.on_checkbox_change(request.note_id, request.checkbox_index)
    if outcome is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return _fragment(controller, completed=outcome is not CompletionOutcome.FAILED)
