"""Host-side collaborators: where markup is shown and where notifications go."""

from __future__ import annotations

import logging
from typing import Protocol

logger = logging.getLogger(__name__)


class RenderSurface(Protocol):
    def html(self, markup: str) -> None: ...


class Notifier(Protocol):
    def show_message(self, text: str) -> None: ...

    def show_error(self, text: str) -> None: ...


class BufferSurface:
    """Keeps the latest markup so an HTTP handler can return it."""

    def __init__(self) -> None:
        self.markup = ""

    def html(self, markup: str) -> None:
        self.markup = markup


class CollectingNotifier:
    """Logs notifications and queues them until the next ``drain()``."""

    def __init__(self) -> None:
        self.messages: list[str] = []
        self.errors: list[str] = []

    def show_message(self, text: str) -> None:
        logger.info(text)
        self.messages.append(text)

    def show_error(self, text: str) -> None:
        logger.warning(text)
        self.errors.append(text)

    def drain(self) -> tuple[list[str], list[str]]:
        messages, errors = self.messages, self.errors
        self.messages, self.errors = [], []
        return messages, errors
