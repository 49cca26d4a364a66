"""Aggregation of independently arriving data events.

Tracks the last payload per event name and reports completion exactly
once per cycle: the first time every expected event has arrived since
construction or the last :meth:`DataAggregator.reset`.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable
from typing import Any


class DataAggregator:
    def __init__(self, expected: Iterable[str]) -> None:
        self._expected: frozenset[str] = frozenset(str(name) for name in expected)
        self._received: dict[str, Any] = {}
        self._complete = False

    @property
    def expected(self) -> frozenset[str]:
        return self._expected

    @property
    def is_complete(self) -> bool:
        return self._complete

    def missing(self) -> frozenset[str]:
        return self._expected - self._received.keys()

    def record(self, name: str, payload: Any) -> bool:
        """Store *payload* under *name* (last write wins).

        Returns ``True`` only for the call that completes the cycle.
        Names outside the expected set are stored but never count.
        """
        self._received[name] = payload
        if self._complete or self.missing():
            return False
        self._complete = True
        return True

    def reset(self) -> None:
        self._received = {}
        self._complete = False

    def get(self, name: str) -> Any:
        return self._received.get(name)

    def snapshot(self) -> dict[str, Any]:
        return copy.deepcopy(self._received)
