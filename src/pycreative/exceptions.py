"""Custom exception hierarchy for pycreative."""

from __future__ import annotations


class CreativeError(Exception):
    """Base exception for all pycreative errors."""


class CreativeConfigError(CreativeError):
    """Invalid or missing configuration."""


class CreativeStateError(CreativeError):
    """Runtime used outside its lifecycle (e.g. probing before ``async with``)."""


class CreativeStorageError(CreativeError):
    """Durable key-value store could not be written."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)
