"""Asset descriptors whose load must be confirmed before the creative is ready."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, field_validator

from pycreative.models._base import CreativeBaseModel


class AssetType(StrEnum):
    IMAGE = "image"
    VIDEO = "video"


class ItemAssetField(CreativeBaseModel):
    """A content item field that references a media file.

    Returned by the ``item_assets`` hook; each present, non-empty value of
    ``name`` in a flattened content item becomes an :class:`AssetDescriptor`.
    """

    type: AssetType
    name: str

    @field_validator("name")
    @classmethod
    def _non_empty_name(cls, value: str) -> str:
        if not value:
            raise ValueError("name must be non-empty")
        return value

    def describe(self, file: str) -> AssetDescriptor:
        return AssetDescriptor(type=self.type, name=self.name, file=file)


class AssetDescriptor(CreativeBaseModel):
    """A typed reference to a media file."""

    type: AssetType
    name: str = ""
    file: str = Field(..., min_length=1, description="Resolved URL of the asset")
