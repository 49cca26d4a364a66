"""Helpers for reading host payloads and content items."""

from __future__ import annotations

import html
import re
from collections.abc import Iterable, Mapping
from typing import Any

import emoji

_SCRIPT_RE = re.compile(r"<script[^>]*>([\S\s]*?)</script>", re.IGNORECASE | re.MULTILINE)
_TAG_RE = re.compile(r"""</?\w(?:[^"'>]|"[^"]*"|'[^']*')*>""", re.IGNORECASE | re.MULTILINE)


def lookup(value: Any, path: str | None, default: Any = None) -> Any:
    """Follow a dotted *path* through nested mappings and lists."""
    if value is None:
        return default
    if not path:
        return value
    current = value
    for part in path.split("."):
        if isinstance(current, Mapping):
            if part not in current:
                return default
            current = current[part]
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return default
    return current


def item_fields(item: Any) -> dict[str, Any] | None:
    """Flatten a content item's ``fields`` list into a single mapping.

    Later fields overwrite earlier ones. Returns ``None`` for items without
    fields.
    """
    if not isinstance(item, Mapping):
        return None
    fields = item.get("fields")
    if not fields:
        return None
    data: dict[str, Any] = {}
    for field in fields:
        if isinstance(field, Mapping):
            data.update(field)
    return data


def items_of_type(items: Iterable[Any] | None, item_type: str) -> list[Any]:
    return [item for item in items or () if isinstance(item, Mapping) and item.get("type") == item_type]


def strip_tags_decode_entities(content: Any) -> str | None:
    """Remove script blocks and markup, then decode HTML entities."""
    if not content or not isinstance(content, str):
        return None
    stripped = _TAG_RE.sub("", _SCRIPT_RE.sub("", content))
    return html.unescape(stripped)


def strip_emojis(content: str) -> str:
    return emoji.replace_emoji(content, replace="")
