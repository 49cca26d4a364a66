from __future__ import annotations

import pytest

from pycreative.events import DataEvent, InboundMessage, canonical_event, is_data_event, unversion_event, version_event


def test_version_round_trip_strips_qualifier() -> None:
    assert version_event("metaDataReceived", "3") == "metaDataReceived@3"
    assert unversion_event("metaDataReceived@3") == "metaDataReceived"
    assert unversion_event("reset") == "reset"


@pytest.mark.parametrize(
    ("wire", "expected"),
    [
        ("metaDataReceived@2", DataEvent.META),
        ("campaignDataReceived", DataEvent.CAMPAIGN),
        ("dataReceived@2", DataEvent.ITEMS),
        ("rulesetsDataReceived@7", DataEvent.RULESETS),
        ("items", DataEvent.ITEMS),
    ],
)
def test_canonical_event_maps_wire_names(wire: str, expected: DataEvent) -> None:
    assert canonical_event(wire) == expected.value


def test_unknown_event_passes_through_version_stripped() -> None:
    assert canonical_event("weather@2") == "weather"
    assert not is_data_event("weather@2")
    assert is_data_event("dataReceived@2")


def test_inbound_message_requires_event() -> None:
    with pytest.raises(ValueError):
        InboundMessage.model_validate({"event": "  "})

    message = InboundMessage.model_validate({"event": " reset ", "extra": 1})
    assert message.event == "reset"
    assert message.data is None
