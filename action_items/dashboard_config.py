"""Dashboard configuration: the per-dashboard view read from note labels."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

DEFAULT_TEMPLATE_TITLE = "_meetingTemplate"


class LabelSource(Protocol):
    """Anything exposing label lookups (a note, in practice)."""

    def get_label_value(self, name: str) -> str | None: ...


def strip_wrapping_quotes(value: str) -> str:
    """Remove one surrounding pair of double quotes.

    Trilium wraps multi-word label values in quotes, so ``"#year=2026"``
    is stored for ``#year=2026``. A value quoted on one side only is kept.
    """
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


@dataclass(frozen=True)
class DashboardConfig:
    """Immutable configuration for one dashboard render.

    Read fresh on every load; nothing here is persisted by this project.
    """

    template_title: str = DEFAULT_TEMPLATE_TITLE
    additional_criteria: str = ""

    @classmethod
    def from_labels(
        cls,
        source: LabelSource | None,
        default_template: str = DEFAULT_TEMPLATE_TITLE,
    ) -> DashboardConfig:
        """Build a config from the ``#template`` and ``#additionalCriteria`` labels.

        A missing *source* (no dashboard note configured) yields the defaults.
        """
        if source is None:
            return cls(template_title=default_template)

        template = source.get_label_value("template") or default_template
        criteria = strip_wrapping_quotes(source.get_label_value("additionalCriteria") or "")
        return cls(template_title=template, additional_criteria=criteria)
