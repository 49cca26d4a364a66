"""pycreative - Async data and asset readiness runtime for interactive creatives."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pycreative")
except PackageNotFoundError:
    __version__ = "0+local"
from pycreative.aggregation import DataAggregator
from pycreative.assets import AssetProbe, AssetReadinessVerifier, HttpAssetProbe
from pycreative.channel import CreativeChannel
from pycreative.config import CreativeConfig
from pycreative.creative import BaseCreative, Screen
from pycreative.cycler import RoundRobinCycler
from pycreative.dispatch import HookDispatcher
from pycreative.events import (
    ControlSignal,
    DataEvent,
    InboundMessage,
    canonical_event,
    unversion_event,
    version_event,
)
from pycreative.exceptions import (
    CreativeConfigError,
    CreativeError,
    CreativeStateError,
    CreativeStorageError,
)
from pycreative.log import CreativeLogger
from pycreative.models import AssetDescriptor, AssetType, ItemAssetField, LogLevel, LogRecord
from pycreative.storage import (
    DurableState,
    JsonFileKeyValueStore,
    KeyValueStore,
    MemoryKeyValueStore,
    deployment_namespace,
)
from pycreative.transport import QueueTransport, Transport

__all__ = [
    "__version__",
    "AssetDescriptor",
    "AssetProbe",
    "AssetReadinessVerifier",
    "AssetType",
    "BaseCreative",
    "ControlSignal",
    "CreativeChannel",
    "CreativeConfig",
    "CreativeConfigError",
    "CreativeError",
    "CreativeLogger",
    "CreativeStateError",
    "CreativeStorageError",
    "DataAggregator",
    "DataEvent",
    "DurableState",
    "HookDispatcher",
    "HttpAssetProbe",
    "InboundMessage",
    "ItemAssetField",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "LogLevel",
    "LogRecord",
    "MemoryKeyValueStore",
    "QueueTransport",
    "RoundRobinCycler",
    "Screen",
    "Transport",
    "canonical_event",
    "deployment_namespace",
    "unversion_event",
    "version_event",
]
