"""Meeting Action Items -- Streamlit UI.

Shows unchecked checklist items grouped by meeting note; ticking a box marks
the item complete in Trilium through the API.
"""

from __future__ import annotations

import streamlit as st

from action_items.ui.api_client import (
    check_health,
    complete_item,
    get_dashboard,
    refresh_dashboard,
)

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(page_title="Meeting Action Items", layout="wide")


def _on_check(key: str, note_id: str, checkbox_index: int) -> None:
    # Indices shift after a completion, so the next item may reuse this key.
    st.session_state.pop(key, None)
    result = complete_item(note_id, checkbox_index)
    for message in result.get("messages", []):
        st.session_state.setdefault("flash", []).append(("success", message))
    for error in result.get("errors", []):
        st.session_state.setdefault("flash", []).append(("error", error))


def _refresh_button(key: str) -> None:
    if st.button("🔄 Refresh", key=key):
        refresh_dashboard()
        st.rerun()


# ---------------------------------------------------------------------------
# Sidebar -- API status
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("Action Items")
    st.markdown("---")

    api_healthy = check_health()
    if api_healthy:
        st.markdown(":green_circle: API connected")
    else:
        st.markdown(":red_circle: API unreachable")

# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------
for kind, text in st.session_state.pop("flash", []):
    if kind == "error":
        st.error(text)
    else:
        st.success(text)

if not api_healthy:
    st.warning("The API server is not reachable. Cannot load action items.")
    st.stop()

dashboard = get_dashboard()
total_items = dashboard.get("total_items", 0)
total_groups = dashboard.get("total_groups", 0)

col_title, col_refresh = st.columns([5, 1])
col_title.header("📋 Meeting Action Items")
col_title.caption(
    f"{total_items} unchecked item{'' if total_items == 1 else 's'} "
    f"from {total_groups} meeting{'' if total_groups == 1 else 's'}"
)
with col_refresh:
    _refresh_button("refresh_top")

if total_items == 0:
    st.success("🎉 All action items completed!")
    criteria = dashboard.get("additional_criteria")
    if criteria:
        st.caption(f"No items found matching: `{criteria}`")
else:
    for group in dashboard.get("groups", []):
        items = group.get("items", [])
        label = f"{group['note_title']}  ·  {len(items)}  ·  {group['date_label']}"
        with st.expander(label, expanded=group.get("expanded", True)):
            st.markdown(f"[Open note]({group['note_url']})")
            for item in items:
                key = f"{group['note_id']}:{item['checkbox_index']}"
                st.checkbox(
                    item["text"],
                    value=False,
                    key=key,
                    on_change=_on_check,
                    args=(key, group["note_id"], item["checkbox_index"]),
                )

st.markdown("---")
st.caption("Open a meeting to jump to its note in Trilium")
_refresh_button("refresh_bottom")
