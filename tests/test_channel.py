from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Any

import pytest

from conftest import ControlledProbe, RecordingTransport
from pycreative.channel import CreativeChannel
from pycreative.config import CreativeConfig
from pycreative.creative import BaseCreative
from pycreative.events import version_event
from pycreative.transport import QueueTransport


class _Creative(BaseCreative):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        self.events: list[str] = []
        super().__init__(CreativeConfig(warn_missing_hooks=False), *args, **kwargs)

    def data_received(self) -> None:
        self.events.append("data_received")

    def assets_loaded(self) -> None:
        self.events.append("assets_loaded")

    def start(self) -> None:
        self.events.append("start")


async def _messages(*messages: Any) -> AsyncIterator[Any]:
    for message in messages:
        yield message


@pytest.mark.asyncio
async def test_serve_sends_ready_then_routes_messages(transport: RecordingTransport) -> None:
    creative = _Creative(transport=transport)
    channel = CreativeChannel(creative, transport)

    await channel.serve(
        _messages(
            {"event": version_event("metaDataReceived"), "data": {"data": {"id": 1}}},
            {"event": version_event("campaignDataReceived"), "data": {"data": {}}},
            {"event": version_event("dataReceived"), "data": {"data": []}},
            {"event": version_event("rulesetsDataReceived"), "data": {"data": []}},
            {"event": "start"},
        )
    )

    assert transport.messages[0] == {"event": "ready"}
    assert creative.events == ["data_received", "assets_loaded", "start"]
    assert creative.data_get_meta() == {"id": 1}


@pytest.mark.asyncio
async def test_reset_message_clears_aggregation(transport: RecordingTransport) -> None:
    creative = _Creative(transport=transport)
    channel = CreativeChannel(creative, transport)

    for name in ("metaDataReceived", "campaignDataReceived", "dataReceived", "rulesetsDataReceived"):
        channel.handle_message({"event": name, "data": {}})
    channel.handle_message({"event": "reset"})

    assert not creative.data_complete
    assert creative.data_get_meta() is None


def test_unknown_and_malformed_messages_are_ignored(transport: RecordingTransport) -> None:
    creative = _Creative(transport=transport)
    channel = CreativeChannel(creative, transport)

    channel.handle_message({"event": "resize", "data": {}})
    channel.handle_message({"data": {}})
    channel.handle_message("not a mapping")  # type: ignore[arg-type]

    assert creative.events == []
    assert transport.messages == []


def test_ready_is_sent_once() -> None:
    transport = QueueTransport()
    channel = CreativeChannel(_Creative(transport=transport), transport)

    channel.send_ready()
    channel.send_ready()

    assert transport.drain() == [{"event": "ready"}]
    assert channel.ready_sent


@pytest.mark.asyncio
async def test_assets_loaded_error_surfaces_on_next_message(transport: RecordingTransport) -> None:
    probe = ControlledProbe()

    class _Failing(_Creative):
        def creative_assets(self) -> list[dict[str, str]]:
            return [{"type": "image", "name": "logo", "file": "http://x/logo.png"}]

        def assets_loaded(self) -> None:
            raise RuntimeError("assets_loaded exploded")

    creative = _Failing(transport=transport, probe=probe)
    channel = CreativeChannel(creative, transport)

    async def messages() -> AsyncIterator[dict[str, Any]]:
        for name in ("metaDataReceived", "campaignDataReceived", "dataReceived", "rulesetsDataReceived"):
            yield {"event": version_event(name), "data": {"data": []}}
        await asyncio.sleep(0)
        probe.resolve("http://x/logo.png")
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        yield {"event": "start"}

    with pytest.raises(RuntimeError, match="assets_loaded exploded"):
        await channel.serve(messages())

    assert "start" not in creative.events
