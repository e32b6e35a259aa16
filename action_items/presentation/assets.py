"""Static CSS and JS for the standalone dashboard page."""

from __future__ import annotations

DASHBOARD_CSS = """
.action-items-widget { padding: 15px; background: #f8f9fa; border-radius: 8px; margin: 10px 0;
  font-family: system-ui, sans-serif; }
.action-items-top, .action-items-bottom { display: flex; justify-content: space-between;
  align-items: center; }
.action-items-top { margin-bottom: 15px; }
.action-items-top h3 { margin: 0; color: #2c3e50; }
.item-count-summary { font-size: 14px; color: #7f8c8d; font-weight: normal; }
.refreshActionItems { padding: 6px 14px; background: #3498db; color: white; border: none;
  border-radius: 4px; cursor: pointer; font-size: 13px; font-weight: 600; }
.refreshActionItems:hover { background: #2980b9; }
.all-complete { padding: 30px; text-align: center; background: white; border-radius: 6px; }
.all-complete p { color: #27ae60; font-size: 18px; margin: 0; }
.all-complete .criteria { color: #7f8c8d; font-size: 14px; margin-top: 10px; }
.all-complete code { background: #ecf0f1; padding: 2px 6px; border-radius: 3px; }
.accordion-group { background: white; border-radius: 6px; margin-bottom: 8px;
  box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1); }
.accordion-header { padding: 12px 15px; cursor: pointer; display: flex; align-items: center;
  border-bottom: 1px solid #ecf0f1; background: #f8f9fa; border-radius: 6px 6px 0 0; }
.accordion-toggle { font-size: 18px; margin-right: 10px; transition: transform 0.2s;
  user-select: none; }
.is-collapsed .accordion-toggle { transform: rotate(-90deg); }
.note-link { color: #2c3e50; text-decoration: none; font-weight: 600; flex: 1; }
.item-count-badge { background: #3498db; color: white; padding: 2px 8px; border-radius: 12px;
  font-size: 12px; font-weight: 600; margin: 0 10px; }
.meeting-date { color: #7f8c8d; font-size: 13px; }
.accordion-content { max-height: 1000px; overflow: hidden; transition: max-height 0.3s ease-out; }
.is-collapsed .accordion-content { max-height: 0; }
.action-item-row { padding: 10px 15px 10px 45px; border-bottom: 1px solid #f0f0f0; display: flex;
  align-items: center; transition: opacity 0.3s, background 0.2s; }
.action-item-row:hover { background: #f8f9fa; }
.action-item-row.is-removing { opacity: 0; }
.action-item-checkbox { cursor: pointer; width: 18px; height: 18px; margin-right: 12px;
  flex-shrink: 0; }
.action-items-bottom { margin-top: 15px; padding-top: 15px; border-top: 1px solid #e0e0e0;
  color: #7f8c8d; font-size: 13px; }
"""

# Event delegation on the container: every action posts to the API and
# swaps in the fragment it returns.
DASHBOARD_JS = """
(function () {
  const root = document.getElementById("action-items-root");

  function notify(messages, errors) {
    messages.forEach((m) => console.log(m));
    errors.forEach((e) => window.alert(e));
  }

  function swap(data) {
    if (!data) return;
    root.innerHTML = data.html;
    notify(data.messages || [], data.errors || []);
  }

  async function post(url, body) {
    const r = await fetch(url, {
      method: "POST",
      headers: { "Content-Type": "application/json" },
      body: body ? JSON.stringify(body) : null,
    });
    const data = await r.json();
    if (!r.ok) {
      notify([], [data.detail || "Request failed"]);
      return null;
    }
    return data;
  }

  root.addEventListener("click", async (e) => {
    if (e.target.closest(".refreshActionItems")) {
      e.preventDefault();
      e.stopPropagation();
      swap(await post("/api/dashboard/refresh"));
      return;
    }
    if (e.target.closest(".note-link")) {
      e.stopPropagation();  // navigation only, no accordion toggle
      return;
    }
    const header = e.target.closest(".accordion-header");
    if (header) {
      const noteId = header.closest(".accordion-group").dataset.noteId;
      swap(await post(`/api/dashboard/groups/${encodeURIComponent(noteId)}/toggle`));
    }
  });

  root.addEventListener("change", async (e) => {
    const box = e.target.closest(".action-item-checkbox");
    if (!box || !box.checked) return;
    const row = box.closest(".action-item-row");
    const data = await post("/api/dashboard/items/complete", {
      note_id: box.dataset.noteId,
      checkbox_index: Number(box.dataset.checkboxIndex),
    });
    if (data && data.completed) {
      row.classList.add("is-removing");
      setTimeout(() => swap(data), 300);
    } else {
      box.checked = false;
      swap(data);
    }
  });
})();
"""
