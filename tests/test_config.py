"""Tests for Settings and the per-dashboard configuration read from labels."""

from __future__ import annotations

import pytest

from action_items.config import Settings
from action_items.dashboard_config import (
    DEFAULT_TEMPLATE_TITLE,
    DashboardConfig,
    strip_wrapping_quotes,
)
from action_items.notes.models import Note

# ---------------------------------------------------------------------------
# Quote stripping
# ---------------------------------------------------------------------------


class TestStripWrappingQuotes:
    def test_strips_both_ends(self) -> None:
        assert strip_wrapping_quotes('"#year=2026"') == "#year=2026"

    def test_strips_only_one_layer(self) -> None:
        assert strip_wrapping_quotes('""#a""') == '"#a"'

    def test_leading_quote_only_is_kept(self) -> None:
        assert strip_wrapping_quotes('"#year=2026') == '"#year=2026'

    def test_trailing_quote_only_is_kept(self) -> None:
        assert strip_wrapping_quotes('#title="x"') == '#title="x"'

    def test_lone_quote_is_kept(self) -> None:
        assert strip_wrapping_quotes('"') == '"'

    def test_unquoted_passthrough(self) -> None:
        assert strip_wrapping_quotes("#priority=high") == "#priority=high"


# ---------------------------------------------------------------------------
# DashboardConfig
# ---------------------------------------------------------------------------


class TestDashboardConfig:
    def test_defaults(self) -> None:
        cfg = DashboardConfig()
        assert cfg.template_title == DEFAULT_TEMPLATE_TITLE == "_meetingTemplate"
        assert cfg.additional_criteria == ""

    def test_no_source_uses_defaults(self) -> None:
        cfg = DashboardConfig.from_labels(None, default_template="_projectTemplate")
        assert cfg == DashboardConfig(template_title="_projectTemplate")

    def test_reads_labels(self) -> None:
        dashboard = Note(
            note_id="dash",
            title="2025 Action Items",
            labels={
                "template": "_projectTemplate",
                "additionalCriteria": '"#year=2025 and #priority=high"',
            },
        )
        cfg = DashboardConfig.from_labels(dashboard)
        assert cfg.template_title == "_projectTemplate"
        assert cfg.additional_criteria == "#year=2025 and #priority=high"

    def test_empty_template_label_falls_back(self) -> None:
        dashboard = Note(note_id="dash", title="Dash", labels={"template": ""})
        cfg = DashboardConfig.from_labels(dashboard)
        assert cfg.template_title == DEFAULT_TEMPLATE_TITLE
        assert cfg.additional_criteria == ""

    def test_immutable(self) -> None:
        cfg = DashboardConfig()
        with pytest.raises(AttributeError):
            cfg.template_title = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("TRILIUM_URL", "DASHBOARD_NOTE_ID", "DEFAULT_TEMPLATE", "LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.trilium_url == "http://localhost:8080"
        assert s.dashboard_note_id == ""
        assert s.default_template == "_meetingTemplate"
        assert s.log_level == "INFO"

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TRILIUM_URL", "http://trilium.local:37840")
        monkeypatch.setenv("DASHBOARD_NOTE_ID", "abc123")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.trilium_url == "http://trilium.local:37840"
        assert s.dashboard_note_id == "abc123"
