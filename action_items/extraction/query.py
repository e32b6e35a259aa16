"""Search-query builder: turns a dashboard config into a Trilium search string."""

from __future__ import annotations

from action_items.dashboard_config import DashboardConfig


def build_search_query(config: DashboardConfig) -> str:
    """Return the search expression for notes created from the configured template.

    Notes labelled ``#notToDo`` and the template note itself are excluded.
    Criteria containing a top-level ``OR`` are parenthesised so they cannot
    swallow the base clause::

        #!notToDo and ~template.title="_meetingTemplate" and note.title != "_meetingTemplate"
        and (#priority=high or #important)
    """
    title = config.template_title
    query = f'#!notToDo and ~template.title="{title}" and note.title != "{title}"'

    criteria = config.additional_criteria
    if criteria and criteria.strip():
        if " OR " in criteria.upper():
            criteria = f"({criteria})"
        query += f" and {criteria}"

    return query
