"""Inbound message routing between the host page and a creative."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Mapping
from typing import Any

from pydantic import ValidationError

from pycreative._constants import READY_EVENT
from pycreative.creative import BaseCreative
from pycreative.events import ControlSignal, InboundMessage, is_data_event, unversion_event
from pycreative.transport import Transport

_logger = logging.getLogger(__name__)


class CreativeChannel:
    """Route host messages to a creative and announce readiness."""

    def __init__(self, creative: BaseCreative, transport: Transport) -> None:
        self._creative = creative
        self._transport = transport
        self._ready_sent = False

    @property
    def ready_sent(self) -> bool:
        return self._ready_sent

    def send_ready(self) -> None:
        if self._ready_sent:
            return
        self._transport.post_message({"event": READY_EVENT})
        self._ready_sent = True

    def handle_message(self, message: Mapping[str, Any]) -> None:
        if not isinstance(message, Mapping):
            _logger.debug("Ignoring non-mapping inbound message %r", type(message))
            return
        try:
            inbound = InboundMessage.model_validate(dict(message))
        except ValidationError:
            _logger.debug("Ignoring malformed inbound message", exc_info=True)
            return

        if is_data_event(inbound.event):
            self._creative.receive_data(inbound.event, inbound.data)
            return

        signal = unversion_event(inbound.event)
        if signal == ControlSignal.RESET:
            self._creative.reset()
        elif signal == ControlSignal.START:
            self._creative.trigger_start()
        else:
            _logger.debug("Ignoring inbound event %s", inbound.event)

    async def serve(self, messages: AsyncIterable[Mapping[str, Any]]) -> None:
        """Announce readiness, then route *messages* until exhausted.

        An error raised by the ``assets_loaded`` hook in the background is
        re-raised before the next message is routed.
        """
        self.send_ready()
        async for message in messages:
            self._creative.raise_hook_errors()
            self.handle_message(message)
        self._creative.raise_hook_errors()
