"""Structured log record sent to the host."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Literal

from pydantic import ConfigDict, Field

from pycreative.models._base import CreativeBaseModel


class LogLevel(StrEnum):
    EMERGENCY = "EMERGENCY"
    ALERT = "ALERT"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    NOTICE = "NOTICE"
    INFO = "INFO"
    DEBUG = "DEBUG"


class LogRecord(CreativeBaseModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    event: Literal["log"] = "log"
    level: LogLevel
    message: str
    context: dict[str, Any] = Field(default_factory=dict)

    def to_message(self) -> dict[str, Any]:
        """Wire shape: ``{event, level, message, context}``."""
        return self.model_dump(mode="json")
