"""Checkbox parsing for Trilium note markup (CKEditor todo lists and loose HTML)."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from typing import Any

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.dammit import EntitySubstitution
from bs4.formatter import HTMLFormatter

from action_items.extraction.models import ParsedCheckbox

CHECKBOX_SELECTOR = 'input[type="checkbox"]'
TODO_ITEM_ATTR = "data-list-item-id"
TODO_DESCRIPTION_SELECTOR = ".todo-list__label__description"

CHECKBOX_GLYPH = "\u2610"
_GLYPH_PREFIX_RE = re.compile(rf"^{CHECKBOX_GLYPH}\s*")
_BRACKET_PREFIX_RE = re.compile(r"^\[\s*\]\s*")


def _todo_description_text(checkbox: Tag) -> str:
    """Text of the description span inside a CKEditor todo-list item."""
    item = checkbox.find_parent("li", attrs={TODO_ITEM_ATTR: True})
    if item is None:
        return ""
    description = item.select_one(TODO_DESCRIPTION_SELECTOR)
    if description is None:
        return ""
    return description.get_text().strip()


def _enclosing_element_text(checkbox: Tag) -> str:
    """Full text of the element wrapping the checkbox."""
    parent = checkbox.parent
    if parent is None:
        return ""
    return parent.get_text().strip()


def _following_siblings_text(checkbox: Tag) -> str:
    """Concatenated text of everything after the checkbox at the same level."""
    parts: list[str] = []
    for node in checkbox.next_siblings:
        if isinstance(node, Tag):
            parts.append(node.get_text())
        elif type(node) is NavigableString:  # skips comments, doctypes, CDATA
            parts.append(str(node))
    return "".join(parts).strip()


# Tried in order; the first non-empty result is the checkbox's label.
TEXT_STRATEGIES: tuple[Callable[[Tag], str], ...] = (
    _todo_description_text,
    _enclosing_element_text,
    _following_siblings_text,
)


def checkbox_text(checkbox: Tag) -> str:
    for strategy in TEXT_STRATEGIES:
        text = strategy(checkbox)
        if text:
            return text
    return ""


def normalize_item_text(text: str) -> str | None:
    """Clean extracted label text, or return None when there is nothing to show.

    Blank text, text made only of non-breaking spaces, and a lone ``☐`` are
    discarded. A leading ``☐`` or ``[ ]`` placeholder is removed.
    """
    text = text.strip()
    if not text or not text.replace("\u00a0", "").strip() or text == CHECKBOX_GLYPH:
        return None

    text = _GLYPH_PREFIX_RE.sub("", text)
    text = _BRACKET_PREFIX_RE.sub("", text).strip()
    return text or None


class _SourceOrderFormatter(HTMLFormatter):
    """Minimal escaping, attributes kept in source order, void tags left unclosed."""

    def attributes(self, tag: Tag) -> Iterable[tuple[str, Any]]:
        return list(tag.attrs.items())


NOTE_FORMATTER = _SourceOrderFormatter(
    entity_substitution=EntitySubstitution.substitute_xml,
    void_element_close_prefix=None,
)


def parse_html(content: str) -> BeautifulSoup:
    return BeautifulSoup(content, "html.parser")


def find_unchecked(soup: BeautifulSoup) -> list[Tag]:
    """All checkbox inputs lacking a ``checked`` attribute, in document order.

    Positions in this list are the ``checkbox_index`` values used for
    write-back.
    """
    return [cb for cb in soup.select(CHECKBOX_SELECTOR) if not cb.has_attr("checked")]


def parse_checkboxes(content: str) -> list[ParsedCheckbox]:
    """Parse note markup into checkbox/label pairs.

    Returns every checkbox in document order with its raw (un-normalised)
    label text. Missing structure just falls through to the next text
    strategy; markup the parser rejects outright raises ``ParserRejectedMarkup``.
    """
    soup = parse_html(content)
    return [
        ParsedCheckbox(checked=cb.has_attr("checked"), text=checkbox_text(cb))
        for cb in soup.select(CHECKBOX_SELECTOR)
    ]


def serialize_html(soup: BeautifulSoup) -> str:
    """Serialise markup back to a fragment, dropping any ``<body>`` wrapper."""
    root = soup.body if soup.body is not None else soup
    return root.decode_contents(formatter=NOTE_FORMATTER)


def mark_checked(content: str, checkbox_index: int) -> str | None:
    """Check the *checkbox_index*-th unchecked checkbox in *content*.

    Returns the updated markup, or None when the index is out of range
    (the note changed since extraction, or the item is already checked).
    """
    soup = parse_html(content)
    unchecked = find_unchecked(soup)
    if not 0 <= checkbox_index < len(unchecked):
        return None

    unchecked[checkbox_index]["checked"] = "checked"
    return serialize_html(soup)
