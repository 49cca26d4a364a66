"""Data models for pycreative."""

from pycreative.models.assets import AssetDescriptor, AssetType, ItemAssetField
from pycreative.models.log import LogLevel, LogRecord

__all__ = [
    "AssetDescriptor",
    "AssetType",
    "ItemAssetField",
    "LogLevel",
    "LogRecord",
]
