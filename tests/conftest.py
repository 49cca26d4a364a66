from __future__ import annotations

import asyncio
from typing import Any

import pytest

from pycreative.models.assets import AssetDescriptor


class RecordingTransport:
    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    def post_message(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    def logs(self, level: str | None = None) -> list[dict[str, Any]]:
        return [m for m in self.messages if m.get("event") == "log" and (level is None or m["level"] == level)]


class ControlledProbe:
    """Probe whose results are resolved by the test, one file at a time."""

    def __init__(self) -> None:
        self.started: list[str] = []
        self._futures: dict[str, list[asyncio.Future[bool]]] = {}

    async def probe(self, asset: AssetDescriptor) -> bool:
        future: asyncio.Future[bool] = asyncio.get_running_loop().create_future()
        self.started.append(asset.file)
        self._futures.setdefault(asset.file, []).append(future)
        return await future

    def resolve(self, file: str, loaded: bool = True) -> None:
        for future in self._futures.pop(file, []):
            if not future.done():
                future.set_result(loaded)


class InstantProbe:
    def __init__(self, loaded: bool = True) -> None:
        self.loaded = loaded
        self.seen: list[AssetDescriptor] = []

    async def probe(self, asset: AssetDescriptor) -> bool:
        self.seen.append(asset)
        return self.loaded


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()
