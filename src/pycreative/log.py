"""Structured log emitter.

Validates level, message and context before forwarding a ``log`` event
to the host. Bad input never raises: it is replaced by a safe default and
reported with a WARNING record of its own.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pycreative._constants import LOG_TAG, MAX_LOG_CONTEXT_SIZE, MAX_LOG_FIELD_LENGTH
from pycreative.models.log import LogLevel, LogRecord
from pycreative.transport import Transport


def _trim(value: Any) -> str:
    return str(value)[:MAX_LOG_FIELD_LENGTH]


class CreativeLogger:
    def __init__(self, transport: Transport, *, tag: str = LOG_TAG) -> None:
        self._transport = transport
        self._tag = tag

    def log(self, level: Any, message: Any, context: Mapping[str, Any] | None = None) -> None:
        level_text = _trim(level)
        message_text = _trim(message)

        if level_text not in LogLevel._value2member_map_:
            self._emit(LogLevel.WARNING, "Invalid log level", {"level": level_text})
            return

        self._emit(LogLevel(level_text), message_text, self._validate_context(context))

    def info(self, message: Any, context: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.INFO, message, context)

    def warning(self, message: Any, context: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.WARNING, message, context)

    def debug(self, message: Any, context: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.DEBUG, message, context)

    def error(self, message: Any, context: Mapping[str, Any] | None = None) -> None:
        self.log(LogLevel.ERROR, message, context)

    def _validate_context(self, context: Mapping[str, Any] | None) -> dict[str, Any]:
        if not context:
            return {}
        if not isinstance(context, Mapping):
            self._emit(LogLevel.WARNING, "Malformed context", {})
            return {}

        try:
            encoded = json.dumps(dict(context), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError):
            self._emit(LogLevel.WARNING, "Malformed context", {})
            return {}

        context_size = len(encoded)
        if context_size > MAX_LOG_CONTEXT_SIZE:
            self._emit(LogLevel.WARNING, "Context too large", {"contextSize": context_size})
            return {}

        # Round-trip so the record only ever holds plain JSON types.
        decoded: dict[str, Any] = json.loads(encoded)
        return decoded

    def _emit(self, level: LogLevel, message: str, context: dict[str, Any]) -> None:
        record = LogRecord(level=level, message=f"{self._tag} {message}", context=context)
        self._transport.post_message(record.to_message())
