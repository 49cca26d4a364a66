"""Round-robin cycling backed by durable state.

Each key holds the index returned last; reloads of the same deployment
carry on from there.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TypeVar

from pycreative.storage import DurableState

T = TypeVar("T")

_ABSENT = -1


class RoundRobinCycler:
    def __init__(self, state: DurableState) -> None:
        self._state = state

    def _last(self, key: str) -> int:
        last = self._state.get(key, _ABSENT)
        # bool is an int subclass; treat it and negatives as corrupt.
        if isinstance(last, bool) or not isinstance(last, int) or last < 0:
            return _ABSENT
        return last

    def cycle_to_max(self, key: str, max_value: int) -> int:
        """Return the next index in ``0..max_value-1`` for *key* and persist it."""
        if max_value < 1:
            raise ValueError(f"max_value must be at least 1, got {max_value}")
        next_value = (self._last(key) + 1) % max_value
        self._state.set(key, next_value)
        return next_value

    def cycle_next(self, key: str, sequence: Sequence[T]) -> T:
        """Return the next element of *sequence* for *key*."""
        return sequence[self.cycle_to_max(key, len(sequence))]
