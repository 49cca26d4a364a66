"""Optional hook dispatch.

A creative opts into behaviour by defining hooks (``items_handler``,
``data_received``, ``assets_loaded`` ...). Absent hooks are a no-op, with
an optional warning; errors raised by a hook propagate to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

_logger = logging.getLogger(__name__)

Hook = Callable[..., Any]


class HookDispatcher:
    """Call hooks by name on *target*, or from an explicit *hooks* mapping.

    Hooks in the mapping take precedence over attributes of the target.
    """

    def __init__(
        self,
        target: object,
        *,
        hooks: Mapping[str, Hook] | None = None,
        warn_missing: bool = True,
        class_name: str = "Creative",
    ) -> None:
        self._target = target
        self._hooks: dict[str, Hook] = dict(hooks or {})
        self._warn_missing = warn_missing
        self._class_name = class_name

    def register(self, name: str, hook: Hook) -> None:
        self._hooks[name] = hook

    def resolve(self, name: str) -> Hook | None:
        hook = self._hooks.get(name)
        if hook is not None:
            return hook
        candidate = getattr(self._target, name, None)
        return candidate if callable(candidate) else None

    def has(self, name: str) -> bool:
        return self.resolve(name) is not None

    def call(self, name: str, args: Sequence[Any] | None = None, *, warn: bool = False) -> Any:
        """Invoke hook *name* with *args* and return its result.

        Returns ``None`` when the hook is not defined.
        """
        hook = self.resolve(name)
        if hook is None:
            if warn:
                self.definition_warning(name)
            return None
        return hook(*(args or ()))

    def definition_warning(self, name: str) -> None:
        if not self._warn_missing:
            return
        _logger.warning("Method [%s] may need to be defined in class [%s]", name, self._class_name)
