"""Base class for creatives.

A concrete creative subclasses :class:`BaseCreative` and defines only the
hooks it cares about:

* ``{event}_handler(payload)`` for each data event (``meta_handler`` ...)
* ``data_received()`` once every data event has arrived
* ``assets_loaded()`` once every referenced asset has loaded
* ``start()`` when the host starts the interaction
* ``creative_assets()`` static assets to verify
* ``item_assets()`` content item fields that reference assets
* ``{screen}_init_screen()`` the first time a screen is shown

Usage::

    async with MyCreative(config, transport=transport) as creative:
        channel = CreativeChannel(creative, transport)
        await channel.serve(messages)
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

import aiohttp

from pycreative._constants import FALLBACK_CONTAINER, LAST_SCREEN_KEY, SCREEN_CONTAINER_PREFIX
from pycreative.aggregation import DataAggregator
from pycreative.assets import AssetProbe, AssetReadinessVerifier, HttpAssetProbe
from pycreative.config import CreativeConfig
from pycreative.content import item_fields, items_of_type, lookup, strip_emojis, strip_tags_decode_entities
from pycreative.cycler import RoundRobinCycler
from pycreative.dispatch import HookDispatcher
from pycreative.events import DataEvent, canonical_event
from pycreative.exceptions import CreativeStateError
from pycreative.log import CreativeLogger
from pycreative.models.assets import AssetDescriptor, ItemAssetField
from pycreative.storage import (
    DurableState,
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    deployment_namespace,
)
from pycreative.transport import Transport

_logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclasses.dataclass
class Screen:
    """Registry entry for one screen."""

    name: str
    container: str
    initialized: bool = False
    visible: bool = False


def _default_store(config: CreativeConfig) -> KeyValueStore:
    if config.storage_path:
        return JsonFileKeyValueStore(config.storage_path)
    return MemoryKeyValueStore()


class BaseCreative:
    """Data and asset readiness runtime for one creative instance."""

    def __init__(
        self,
        config: CreativeConfig | None = None,
        *,
        transport: Transport,
        store: KeyValueStore | None = None,
        probe: AssetProbe | None = None,
        http_session: aiohttp.ClientSession | None = None,
        hooks: Mapping[str, Callable[..., Any]] | None = None,
    ) -> None:
        self._config = config if config is not None else CreativeConfig()
        self._transport = transport
        self._external_session = http_session is not None
        self._http_session = http_session
        self.logger = CreativeLogger(transport, tag=self._config.log_tag)

        self._hooks = HookDispatcher(self, hooks=hooks, warn_missing=self._config.warn_missing_hooks)
        self._state = DurableState(
            store if store is not None else _default_store(self._config),
            deployment_namespace(self._config.deployment_origin, self._config.deployment_path),
        )
        self._cycler = RoundRobinCycler(self._state)

        self._aggregator = DataAggregator(self._config.data_events)
        self._verifier = AssetReadinessVerifier(self._fire_assets_loaded, probe)
        if probe is None and http_session is not None:
            self._verifier.probe = HttpAssetProbe(http_session)

        self._static_assets: tuple[AssetDescriptor, ...] = tuple(self._creative_assets())
        self._asset_list: list[AssetDescriptor] = list(self._static_assets)
        self._assets_deferred = False

        self._screens: dict[str, Screen] = {}
        self._fallback_visible = False

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> BaseCreative:
        if self._verifier.probe is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._verifier.probe = HttpAssetProbe(self._http_session)
        if self._assets_deferred:
            self._assets_deferred = False
            self._check_assets()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self._verifier.cancel()
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._verifier.probe = None
        if exc[0] is None:
            self._verifier.raise_errors()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> CreativeConfig:
        return self._config

    @property
    def hooks(self) -> HookDispatcher:
        return self._hooks

    @property
    def asset_list(self) -> list[AssetDescriptor]:
        return list(self._asset_list)

    @property
    def data_complete(self) -> bool:
        return self._aggregator.is_complete

    @property
    def assets_ready(self) -> bool:
        return self._verifier.fired

    def get_version(self) -> str:
        from pycreative import __version__

        return __version__

    async def wait_for_assets(self) -> None:
        """Wait until every asset probe started so far has settled.

        Errors raised by the ``assets_loaded`` hook inside a probe task are
        re-raised here.
        """
        await self._verifier.wait()

    def raise_hook_errors(self) -> None:
        """Re-raise the first ``assets_loaded`` hook error from a finished probe."""
        self._verifier.raise_errors()

    # ------------------------------------------------------------------
    # Data aggregation
    # ------------------------------------------------------------------

    def receive_data(self, event: str, data: Any) -> None:
        """Record one data payload and fire ``data_received`` once all have arrived."""
        name = canonical_event(event)

        self._hooks.call(f"{name}_handler", [data])
        self._hooks.call(f"_{name}_collate_assets", [data])

        if self._aggregator.record(name, data):
            self._fire_data_received()

    def reset(self) -> None:
        """Forget every payload; completion has to be earned again."""
        self._aggregator.reset()
        self._verifier.reset()
        self._asset_list = list(self._static_assets)
        self._assets_deferred = False

    def trigger_start(self) -> None:
        self._hooks.call("start", warn=True)

    def _fire_data_received(self) -> None:
        self._hooks.call("data_received", warn=True)
        self._check_assets()

    def _items_collate_assets(self, data: Any) -> None:
        """Add an asset for every asset-bearing field present in the content items."""
        items = lookup(data, "data")
        if not items or not isinstance(items, list):
            return

        fields = self._item_assets()
        if not fields:
            return

        for item in items:
            flat = item_fields(item)
            if flat is None:
                continue
            for field in fields:
                file = flat.get(field.name)
                if file and isinstance(file, str):
                    self._asset_list.append(field.describe(file))

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    def _creative_assets(self) -> list[AssetDescriptor]:
        assets = self._hooks.call("creative_assets", warn=True) or []
        return [AssetDescriptor.model_validate(asset) for asset in assets]

    def _item_assets(self) -> list[ItemAssetField]:
        fields = self._hooks.call("item_assets", warn=True) or []
        return [ItemAssetField.model_validate(field) for field in fields]

    def _check_assets(self) -> None:
        if self._asset_list and self._verifier.probe is None:
            # Started by __aenter__ once an HTTP session exists.
            self._assets_deferred = True
            _logger.debug("Deferring check of %s assets until the creative is entered", len(self._asset_list))
            return
        self._verifier.check(list(self._asset_list))

    def _fire_assets_loaded(self) -> None:
        self._hooks.call("assets_loaded")

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    def init_screens(self, screens: Sequence[str]) -> None:
        if any(not screen for screen in screens):
            raise ValueError("screen names must be non-empty")
        self._screens = {
            screen: Screen(name=screen, container=f"{SCREEN_CONTAINER_PREFIX}{screen}") for screen in screens
        }

    @property
    def screens(self) -> tuple[str, ...]:
        return tuple(self._screens)

    def screen(self, name: str) -> Screen:
        try:
            return self._screens[name]
        except KeyError:
            raise CreativeStateError(f"Unknown screen {name!r}") from None

    @property
    def visible_screen(self) -> str | None:
        for screen in self._screens.values():
            if screen.visible:
                return screen.name
        return None

    @property
    def fallback_visible(self) -> bool:
        return self._fallback_visible

    def show_screen(self, name: str) -> None:
        screen = self.screen(name)
        self._init_screen(screen)
        for other in self._screens.values():
            other.visible = False
        screen.visible = True
        self._fallback_visible = False
        _logger.debug("[showScreen] %s", name)

    def _init_screen(self, screen: Screen) -> None:
        if screen.initialized:
            return
        self._hooks.call(f"{screen.name}_init_screen")
        screen.initialized = True

    def next_screen(self) -> str:
        if not self._screens:
            raise CreativeStateError("No screens registered. Call init_screens() first")
        return self.cycle_next(LAST_SCREEN_KEY, self.screens)

    def show_fallback(self, code: str | int | None = None) -> None:
        self._fallback_visible = True
        self.logger.warning("Fallback shown", {"container": FALLBACK_CONTAINER, "code": code})

    # ------------------------------------------------------------------
    # Data getters
    # ------------------------------------------------------------------

    def _payload_data(self, event: DataEvent) -> Any:
        return lookup(self._aggregator.get(event.value), "data")

    def data_get_meta(self) -> Any:
        return self._payload_data(DataEvent.META)

    def data_get_campaign(self) -> Any:
        return self._payload_data(DataEvent.CAMPAIGN)

    def data_get_items(self) -> Any:
        return self._payload_data(DataEvent.ITEMS)

    def data_get_rulesets(self) -> Any:
        return self._payload_data(DataEvent.RULESETS)

    def get_frame_specification(self, key: str | None = None) -> Any:
        path = f"specification.{key}" if key else "specification"
        return lookup(self.data_get_meta(), path)

    def get_frame_utc_offset_minutes(self) -> float | None:
        offset_seconds = lookup(self.data_get_meta(), "meta.location.timezone_offset")
        if isinstance(offset_seconds, bool) or not isinstance(offset_seconds, (int, float)):
            return None
        return offset_seconds / 60

    def get_frame_tags(self, slug: str) -> Any:
        return lookup(self.data_get_meta(), f"tags.{slug}")

    def get_frame_tag(self, slug: str) -> Any:
        tags = self.get_frame_tags(slug)
        if isinstance(tags, list) and tags:
            return tags[0]
        return None

    # ------------------------------------------------------------------
    # Durable state
    # ------------------------------------------------------------------

    def get_state(self, key: str, default: Any = None) -> Any:
        return self._state.get(key, default)

    def set_state(self, key: str, value: Any) -> None:
        self._state.set(key, value)

    def state_key(self, key: str) -> str:
        return self._state.key(key)

    def cycle_to_max(self, key: str, max_value: int) -> int:
        return self._cycler.cycle_to_max(key, max_value)

    def cycle_next(self, key: str, sequence: Sequence[T]) -> T:
        return self._cycler.cycle_next(key, sequence)

    # ------------------------------------------------------------------
    # Content helpers
    # ------------------------------------------------------------------

    item_fields = staticmethod(item_fields)
    items_of_type = staticmethod(items_of_type)
    strip_tags_decode_entities = staticmethod(strip_tags_decode_entities)
    strip_emojis = staticmethod(strip_emojis)

    # ------------------------------------------------------------------
    # Log helpers
    # ------------------------------------------------------------------

    def log(self, level: Any, message: Any, context: Mapping[str, Any] | None = None) -> None:
        self.logger.log(level, message, context)

    def log_info(self, message: Any, context: Mapping[str, Any] | None = None) -> None:
        self.logger.info(message, context)

    def log_warning(self, message: Any, context: Mapping[str, Any] | None = None) -> None:
        self.logger.warning(message, context)

    def log_debug(self, message: Any, context: Mapping[str, Any] | None = None) -> None:
        self.logger.debug(message, context)

    def log_error(self, message: Any, context: Mapping[str, Any] | None = None) -> None:
        self.logger.error(message, context)
