"""Base model for pycreative data types.

Every model is frozen and ignores unknown keys so that consumer hooks
may return plain dicts carrying extra presentation fields.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CreativeBaseModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )
