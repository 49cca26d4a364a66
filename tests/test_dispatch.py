from __future__ import annotations

import logging

import pytest

from pycreative.dispatch import HookDispatcher


class _Target:
    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[object, ...]]] = []

    def meta_handler(self, payload: object) -> str:
        self.calls.append(("meta_handler", (payload,)))
        return "handled"

    def broken(self) -> None:
        raise RuntimeError("consumer bug")

    not_callable = "value"


def test_existing_hook_is_called_with_args() -> None:
    target = _Target()
    dispatcher = HookDispatcher(target)

    result = dispatcher.call("meta_handler", [{"data": 1}])

    assert result == "handled"
    assert target.calls == [("meta_handler", ({"data": 1},))]


def test_missing_hook_without_warning_is_silent(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="pycreative.dispatch")
    dispatcher = HookDispatcher(_Target())

    assert dispatcher.call("assets_loaded") is None
    assert dispatcher.call("not_callable") is None
    assert caplog.records == []


def test_missing_hook_with_warning_names_it_once(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="pycreative.dispatch")
    dispatcher = HookDispatcher(_Target())

    dispatcher.call("data_received", warn=True)

    assert len(caplog.records) == 1
    assert caplog.records[0].levelno == logging.WARNING
    assert "data_received" in caplog.records[0].getMessage()


def test_warnings_can_be_disabled(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="pycreative.dispatch")
    dispatcher = HookDispatcher(_Target(), warn_missing=False)

    dispatcher.call("data_received", warn=True)

    assert caplog.records == []


def test_hook_errors_propagate() -> None:
    dispatcher = HookDispatcher(_Target())

    with pytest.raises(RuntimeError, match="consumer bug"):
        dispatcher.call("broken")


def test_registered_hook_takes_precedence() -> None:
    target = _Target()
    dispatcher = HookDispatcher(target, hooks={"meta_handler": lambda payload: ("mapped", payload)})
    dispatcher.register("start", lambda: "started")

    assert dispatcher.call("meta_handler", ["x"]) == ("mapped", "x")
    assert dispatcher.call("start") == "started"
    assert dispatcher.has("start")
    assert target.calls == []
