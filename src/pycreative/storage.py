"""Durable key-value state, namespaced per deployed creative.

The backing store only ever holds strings. :class:`DurableState` layers
JSON encoding and per-deployment key namespacing on top of it.
"""

from __future__ import annotations

import base64
import contextlib
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from pycreative.exceptions import CreativeStorageError

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Structural interface of an origin-scoped durable string store."""

    def get(self, key: str) -> str | None:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryKeyValueStore:
    """Process-local store; state lives as long as the instance."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileKeyValueStore:
    """Store persisted as a single JSON object on disk.

    The file is re-read on every ``get`` and rewritten atomically on every
    ``set`` so separate processes (reloads) observe each other's writes.
    """

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            _logger.debug("Ignoring unreadable store file %s", self._path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        tmp_name: str | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._path.parent, prefix=f".{self._path.name}.")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, separators=(",", ":"), sort_keys=True)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise CreativeStorageError(f"Cannot write store file: {exc}", path=str(self._path)) from exc


def deployment_namespace(origin: str, path: str) -> str:
    """Opaque, stable namespace for one deployment (origin + path)."""
    raw = f"{origin}{path}".encode()
    return base64.urlsafe_b64encode(raw).decode("ascii")


class DurableState:
    """JSON values under namespaced keys of a :class:`KeyValueStore`."""

    def __init__(self, store: KeyValueStore, namespace: str) -> None:
        self._store = store
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def key(self, key: str) -> str:
        return f"{self._namespace}.{key}"

    def get(self, key: str, default: Any = None) -> Any:
        """Return the decoded value at *key*, or *default* if absent or malformed."""
        value = self._store.get(self.key(key))
        if value is None:
            return default
        try:
            return json.loads(value)
        except (TypeError, ValueError):
            _logger.debug("Malformed durable value at %s", key, exc_info=True)
            return default

    def set(self, key: str, value: Any) -> None:
        self._store.set(self.key(key), json.dumps(value, separators=(",", ":")))
