"""HTTP client wrapper for the Action Items FastAPI backend."""

from __future__ import annotations

import httpx
import streamlit as st

from action_items.config import settings

API_URL = settings.api_url


def check_health() -> bool:
    """Return True if the API server responds to /health."""
    try:
        r = httpx.get(f"{API_URL}/health", timeout=5.0)
        return r.status_code == 200
    except httpx.ConnectError:
        return False


def get_dashboard() -> dict:  # type: ignore[type-arg]
    """Fetch the current dashboard (groups and items)."""
    try:
        r = httpx.get(f"{API_URL}/api/dashboard", timeout=60.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Loading action items failed: {e}")
        return {}


def refresh_dashboard() -> dict:  # type: ignore[type-arg]
    """Reload every note on the server side."""
    try:
        r = httpx.post(f"{API_URL}/api/dashboard/refresh", timeout=60.0)
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Refresh failed: {e}")
        return {}


def complete_item(note_id: str, checkbox_index: int) -> dict:  # type: ignore[type-arg]
    """Mark one item complete in its source note."""
    try:
        r = httpx.post(
            f"{API_URL}/api/dashboard/items/complete",
            json={"note_id": note_id, "checkbox_index": checkbox_index},
            timeout=30.0,
        )
        r.raise_for_status()
        return r.json()  # type: ignore[no-any-return]
    except httpx.HTTPError as e:
        st.error(f"Failed to update the note: {e}")
        return {}
