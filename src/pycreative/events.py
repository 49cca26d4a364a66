"""Inbound event names and their normalization.

The host tags every data message with a wire name that may carry a
protocol version (``metaDataReceived@2``). Everything past the channel
boundary only ever sees the canonical :class:`DataEvent` values.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pycreative._constants import PROTOCOL_VERSION, VERSION_SEPARATOR


class DataEvent(StrEnum):
    META = "meta"
    CAMPAIGN = "campaign"
    ITEMS = "items"
    RULESETS = "rulesets"


class ControlSignal(StrEnum):
    RESET = "reset"
    START = "start"


#: Wire names sent by the host, keyed to the canonical event they carry.
WIRE_DATA_EVENTS: dict[str, DataEvent] = {
    "metaDataReceived": DataEvent.META,
    "campaignDataReceived": DataEvent.CAMPAIGN,
    "dataReceived": DataEvent.ITEMS,
    "rulesetsDataReceived": DataEvent.RULESETS,
}


def version_event(name: str, version: str = PROTOCOL_VERSION) -> str:
    """Qualify *name* with a protocol version (``name@version``)."""
    return f"{name}{VERSION_SEPARATOR}{version}"


def unversion_event(name: str) -> str:
    """Strip any protocol version qualifier from *name*."""
    return name.split(VERSION_SEPARATOR, 1)[0].strip()


def canonical_event(name: str) -> str:
    """Return the canonical event name for a wire or canonical *name*.

    Unknown names are returned version-stripped but otherwise untouched.
    """
    bare = unversion_event(name)
    wire = WIRE_DATA_EVENTS.get(bare)
    if wire is not None:
        return wire.value
    return bare


def is_data_event(name: str) -> bool:
    bare = unversion_event(name)
    return bare in WIRE_DATA_EVENTS or bare in DataEvent._value2member_map_


class InboundMessage(BaseModel):
    """A message delivered by the host channel."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    event: str = Field(..., description="Wire event name, possibly version-qualified")
    data: Any = Field(default=None, description="Payload for data events")

    @field_validator("event")
    @classmethod
    def _normalize_event(cls, value: str) -> str:
        event = value.strip()
        if not event:
            raise ValueError("event must be non-empty")
        return event
