"""Creative runtime configuration for pycreative."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pycreative._constants import LOG_TAG
from pycreative.events import DataEvent
from pycreative.exceptions import CreativeConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_data_events(values: Any) -> tuple[DataEvent, ...]:
    if isinstance(values, str):
        values = [part for part in (p.strip() for p in values.split(",")) if part]
    events: list[DataEvent] = []
    for value in values:
        try:
            events.append(DataEvent(value))
        except ValueError as exc:
            raise CreativeConfigError(f"Unknown data event {value!r}") from exc
    return tuple(events)


@dataclasses.dataclass(frozen=True)
class CreativeConfig:
    """Runtime configuration.

    Parameters
    ----------
    deployment_origin : str
        Origin of the page hosting the creative (scheme + host).
    deployment_path : str
        Path of the page hosting the creative. Together with the origin
        this namespaces durable state, so reloads of one deployment share
        state while other deployments do not.
    storage_path : str or None
        JSON file backing the durable store. ``None`` keeps durable state
        in memory for the lifetime of the process.
    log_tag : str
        Prefix prepended to every structured log message.
    data_events : tuple of DataEvent
        The closed set of data events that must all arrive before the
        creative counts its data as received.
    warn_missing_hooks : bool
        Emit a diagnostic when an expected hook is not defined.
    """

    deployment_origin: str = "http://localhost"
    deployment_path: str = "/"
    storage_path: str | None = None
    log_tag: str = LOG_TAG
    data_events: tuple[DataEvent, ...] = tuple(DataEvent)
    warn_missing_hooks: bool = True

    def __post_init__(self) -> None:
        events = _parse_data_events(self.data_events)
        if not events:
            raise CreativeConfigError("data_events must name at least one event")
        if len(set(events)) != len(events):
            raise CreativeConfigError(f"data_events contains duplicates: {[e.value for e in events]}")
        object.__setattr__(self, "data_events", events)

    @classmethod
    def from_env(cls, **overrides: Any) -> CreativeConfig:
        """Create configuration from ``CREATIVE_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "CREATIVE_DEPLOYMENT_ORIGIN": "deployment_origin",
            "CREATIVE_DEPLOYMENT_PATH": "deployment_path",
            "CREATIVE_STORAGE_PATH": "storage_path",
            "CREATIVE_LOG_TAG": "log_tag",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        events_env = env.get("CREATIVE_DATA_EVENTS")
        if events_env is not None and "data_events" not in overrides:
            config_kwargs["data_events"] = _parse_data_events(events_env)

        if "warn_missing_hooks" not in overrides:
            config_kwargs["warn_missing_hooks"] = _env_bool(env.get("CREATIVE_WARN_MISSING_HOOKS"), True)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
