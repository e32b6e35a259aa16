"""Pydantic request/response schemas for the Action Items API."""

from __future__ import annotations

from pydantic import BaseModel


class CompleteItemRequest(BaseModel):
    """Request body for the /api/dashboard/items/complete endpoint."""

    note_id: str
    checkbox_index: int


class DashboardFragment(BaseModel):
    """Re-rendered widget markup plus notifications raised while handling the event."""

    html: str
    total_items: int
    total_groups: int
    completed: bool | None = None
    messages: list[str] = []
    errors: list[str] = []


class ItemResponse(BaseModel):
    """A single unchecked checklist item."""

    checkbox_index: int
    text: str
    state: str = "visible"


class GroupResponse(BaseModel):
    """One meeting note and its unchecked items."""

    note_id: str
    note_title: str
    note_url: str
    meeting_date: str | None = None
    date_label: str
    expanded: bool = True
    items: list[ItemResponse] = []


class DashboardResponse(BaseModel):
    """Response body for the /api/dashboard endpoint."""

    total_items: int
    total_groups: int
    additional_criteria: str = ""
    groups: list[GroupResponse] = []
