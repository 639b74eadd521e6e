"""Fixed catalogue of farm activity categories and free-text matching."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, Optional


class ActivityCategory(Enum):
    HARVEST = ("harvest", "수확", "🍅", "예: 토마토 수확, 감자 캐기")
    SOWING = ("sowing", "파종", "🌱", "예: 씨앗 뿌리기, 모종 심기")
    MANAGEMENT = ("manage", "관리", "🧺", "예: 물주기, 잡초 제거, 비료 주기")
    OBSERVATION = ("observe", "관찰", "👀", "예: 작물 상태 관찰, 날씨 관찰")
    OTHER = ("etc", "기타", "✏️", "예: 활동 기록 작성, 그림 그리기")

    def __init__(self, key: str, label: str, icon: str, placeholder: str):
        self.key = key
        self.label = label
        self.icon = icon
        self.placeholder = placeholder


def match_activity_types(text: Any) -> dict[ActivityCategory, bool]:
    """Mark each category selected when its label occurs in the free text.

    Substring matching is a heuristic; several categories may match one sentence.
    """

    haystack = text if isinstance(text, str) else ""
    return {category: bool(haystack) and category.label in haystack for category in ActivityCategory}


def categories_from_tags(tags: Any) -> list[ActivityCategory]:
    """Map stored activity tag labels back to catalogue categories."""

    if isinstance(tags, str):
        tags = [tags]
    if not isinstance(tags, (list, tuple)):
        return []
    labels = {str(tag).strip() for tag in tags if tag is not None}
    return [category for category in ActivityCategory if category.label in labels]


def _resolve_item(item: Any) -> tuple[bool, str]:
    if isinstance(item, Mapping):
        detail = str(item.get("detail") or item.get("description") or "")
        selected = item.get("selected")
        return (bool(selected) if selected is not None else bool(detail)), detail
    if isinstance(item, bool):
        return item, ""
    if isinstance(item, str):
        return True, item
    return False, ""


def build_activity_type_state(
    raw_types: Optional[Mapping[str, Any]] = None,
    raw_details: Optional[Mapping[str, Any]] = None,
) -> dict[ActivityCategory, dict]:
    """Build per-category ``{selected, detail}`` state from saved editor values.

    ``raw_types`` is keyed by category key and may hold an object, a boolean
    or a detail string per category.
    """

    state = {}
    for category in ActivityCategory:
        selected, detail = False, ""
        if isinstance(raw_types, Mapping) and category.key in raw_types:
            selected, detail = _resolve_item(raw_types[category.key])
        if isinstance(raw_details, Mapping) and not detail:
            detail = str(raw_details.get(category.key) or "")
        state[category] = {"selected": selected, "detail": detail}
    return state


def selected_labels(state: Mapping[ActivityCategory, Any]) -> list[str]:
    """Return labels of selected categories in catalogue order."""

    labels = []
    for category in ActivityCategory:
        value = state.get(category)
        if isinstance(value, Mapping):
            value = value.get("selected")
        if value:
            labels.append(category.label)
    return labels

