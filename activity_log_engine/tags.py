"""Emotion tag and keyword list normalization."""

from __future__ import annotations

import re
from typing import Any

_TAG_SEPARATORS = re.compile(r"[,\s/]+")
_LIST_SEPARATORS = re.compile(r"[,/]+")


def _clean_items(values) -> list[str]:
    items = []
    for value in values:
        text = "" if value is None else str(value).strip()
        if text:
            items.append(text)
    return items


def normalize_tags(value: Any) -> frozenset[str]:
    """Normalize a tag list or a comma/slash/space separated string into a tag set."""

    if isinstance(value, (list, tuple, set, frozenset)):
        return frozenset(_clean_items(value))
    if isinstance(value, str):
        return frozenset(_clean_items(_TAG_SEPARATORS.split(value)))
    return frozenset()


def split_list(value: Any) -> tuple[str, ...]:
    """Split a list or comma/slash separated string, keeping first-seen order."""

    if isinstance(value, (list, tuple)):
        items = _clean_items(value)
    elif isinstance(value, str):
        items = _clean_items(_LIST_SEPARATORS.split(value))
    else:
        return ()
    return tuple(dict.fromkeys(items))
