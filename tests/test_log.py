from __future__ import annotations

from typing import Any

from conftest import RecordingTransport
from pycreative.log import CreativeLogger


def test_log_forwards_tagged_record(transport: RecordingTransport) -> None:
    CreativeLogger(transport).log("INFO", "hello", {"screen": "intro"})

    assert transport.messages == [
        {"event": "log", "level": "INFO", "message": "[CREATIVE] hello", "context": {"screen": "intro"}}
    ]


def test_absent_context_becomes_empty_mapping(transport: RecordingTransport) -> None:
    logger = CreativeLogger(transport, tag="[AD]")

    logger.debug("no context")

    assert transport.messages[0]["context"] == {}
    assert transport.messages[0]["message"] == "[AD] no context"


def test_level_and_message_trimmed_to_32_characters(transport: RecordingTransport) -> None:
    CreativeLogger(transport).log("ERROR", "m" * 50)

    assert transport.messages[0]["message"] == "[CREATIVE] " + "m" * 32


def test_invalid_level_rejected_with_warning(transport: RecordingTransport) -> None:
    CreativeLogger(transport).log("VERBOSE", "dropped", {"a": 1})

    assert len(transport.messages) == 1
    warning = transport.messages[0]
    assert warning["level"] == "WARNING"
    assert warning["message"] == "[CREATIVE] Invalid log level"
    assert warning["context"] == {"level": "VERBOSE"}


def test_level_is_trimmed_before_validation(transport: RecordingTransport) -> None:
    CreativeLogger(transport).log("INFO" + " " * 40, "msg")

    assert transport.messages[0]["level"] == "WARNING"
    assert transport.messages[0]["context"]["level"] == "INFO" + " " * 28


def test_oversized_context_replaced_after_single_warning(transport: RecordingTransport) -> None:
    context = {"blob": "x" * 300}

    CreativeLogger(transport).info("big", context)

    assert len(transport.messages) == 2
    warning, original = transport.messages
    assert warning["level"] == "WARNING"
    assert warning["message"] == "[CREATIVE] Context too large"
    assert warning["context"] == {"contextSize": len('{"blob":""}') + 300}
    assert original == {"event": "log", "level": "INFO", "message": "[CREATIVE] big", "context": {}}


def test_context_at_limit_is_kept(transport: RecordingTransport) -> None:
    context = {"k": "x" * (255 - len('{"k":""}'))}

    CreativeLogger(transport).info("edge", context)

    assert len(transport.messages) == 1
    assert transport.messages[0]["context"] == context


def test_unserializable_context_replaced(transport: RecordingTransport) -> None:
    cyclic: dict[str, Any] = {}
    cyclic["self"] = cyclic

    CreativeLogger(transport).warning("cyclic", cyclic)
    CreativeLogger(transport).warning("object", {"value": object()})

    levels = [(m["level"], m["message"], m["context"]) for m in transport.messages]
    assert levels == [
        ("WARNING", "[CREATIVE] Malformed context", {}),
        ("WARNING", "[CREATIVE] cyclic", {}),
        ("WARNING", "[CREATIVE] Malformed context", {}),
        ("WARNING", "[CREATIVE] object", {}),
    ]
