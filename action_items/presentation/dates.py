"""Timestamp parsing and relative-date labels for meeting groups."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

# Trilium writes offsets without a colon: "2025-06-01 09:30:00.000+0200"
_BASIC_OFFSET_RE = re.compile(r"([+-]\d{2})(\d{2})$")

UNKNOWN_DATE = "Unknown date"


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse a Trilium date or timestamp into an aware datetime.

    Accepts ``YYYY-MM-DD`` labels as well as full timestamps. Values without
    an offset are taken as UTC. Returns None for empty or unparseable input.
    """
    if not value:
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _BASIC_OFFSET_RE.sub(r"\1:\2", text)

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_short_date(date: datetime) -> str:
    return f"{date:%b} {date.day}, {date.year}"


def format_relative_date(value: str | None, now: datetime | None = None) -> str:
    """Label a date relative to *now*.

    ``Today``, ``Yesterday``, ``3d ago`` under a week, ``2w ago`` under 30
    days, otherwise a short absolute date such as ``Jun 1, 2025``. Future
    dates also get the absolute form.
    """
    date = parse_timestamp(value)
    if date is None:
        return value or UNKNOWN_DATE

    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    diff_days = (now - date) // timedelta(days=1)

    if diff_days == 0:
        return "Today"
    if diff_days == 1:
        return "Yesterday"
    if 0 < diff_days < 7:
        return f"{diff_days}d ago"
    if 0 < diff_days < 30:
        return f"{diff_days // 7}w ago"
    return format_short_date(date)
