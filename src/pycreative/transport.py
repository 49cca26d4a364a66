"""Outbound channel to the host page."""

from __future__ import annotations

import asyncio
from typing import Any, Protocol


class Transport(Protocol):
    """Structural interface of the creative-to-host message channel.

    Having a protocol here makes it easy to pass test doubles while keeping
    the bundled implementation (`QueueTransport`) concrete.
    """

    def post_message(self, message: dict[str, Any]) -> None:
        ...


class QueueTransport:
    """Transport that hands messages to an in-process host via a queue."""

    def __init__(self, queue: asyncio.Queue[dict[str, Any]] | None = None) -> None:
        self._queue: asyncio.Queue[dict[str, Any]] = queue if queue is not None else asyncio.Queue()

    @property
    def queue(self) -> asyncio.Queue[dict[str, Any]]:
        return self._queue

    def post_message(self, message: dict[str, Any]) -> None:
        self._queue.put_nowait(dict(message))

    def drain(self) -> list[dict[str, Any]]:
        """Return and remove every queued message."""
        messages: list[dict[str, Any]] = []
        while not self._queue.empty():
            messages.append(self._queue.get_nowait())
        return messages
