"""Raw upload record normalization into the canonical activity analysis."""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional

from activity_log_engine.config import DEFAULT_SETTINGS, Settings
from activity_log_engine.duration import coerce_minutes
from activity_log_engine.schema import ActivityAnalysis, Student
from activity_log_engine.tags import normalize_tags, split_list

LEVELS = ("매우 우수", "우수", "보통", "도전적")

# Ordered source keys per canonical field. Dotted keys address nested mappings.
FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "students": ("analysis.students", "students"),
    "date": ("analysis.date", "date", "log_date"),
    "activity_name": (
        "analysis.activityName",
        "activityName",
        "activity_name",
        "activity_title",
        "title",
    ),
    "activity_type": ("analysis.activityType", "activityType", "activity_type"),
    "note": ("analysis.note", "note", "teacher_comment"),
    "duration_minutes": (
        "analysis.durationMinutes",
        "durationMinutes",
        "duration_minutes",
        "related_metrics.minutes",
        "related_metrics.duration_minutes",
    ),
    "level": ("analysis.level", "level", "ability_analysis.level"),
    "ability": (
        "analysis.ability",
        "analysis.abilities",
        "ability",
        "abilities",
        "ability_analysis.main_abilities",
    ),
    "score": ("analysis.score", "score"),
    "score_explanation": (
        "analysis.scoreExplanation",
        "scoreExplanation",
        "score_explanation",
        "ability_analysis.comment",
    ),
    "emotion_summary": ("analysis.emotionSummary", "emotion_tag", "analysis.emotion", "emotionSummary"),
    "emotion_cause": ("analysis.emotionCause", "analysis.emotion_reason", "emotionCause", "emotion_reason"),
    "observed_behaviors": (
        "analysis.observedBehaviors",
        "analysis.behavior",
        "observedBehaviors",
        "behavior_tags",
    ),
    "emotion_tags": (
        "analysis.emotionTags",
        "emotionTags",
        "emotion_tags",
        "analysis.emotion_keywords",
        "emotion_keywords",
    ),
    "raw_text_cleaned": (
        "analysis.rawTextCleaned",
        "rawTextCleaned",
        "log_content",
        "raw_text_cleaned",
        "raw_activity_text",
        "raw_text",
    ),
}


def _unwrap(value: Any) -> Any:
    if isinstance(value, list) and value and isinstance(value[0], Mapping):
        return value[0]
    return value


def _lookup(raw: Mapping[str, Any], key: str) -> Any:
    current: Any = raw
    for part in key.split("."):
        current = _unwrap(current)
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def resolve(raw: Mapping[str, Any], keys: Iterable[str], accept=lambda value: value is not None) -> Any:
    """Return the first candidate along ``keys`` accepted by ``accept``."""

    for key in keys:
        value = _lookup(raw, key)
        if accept(value):
            return value
    return None


def _as_text(value: Any) -> str:
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, (list, tuple)):
        return ", ".join(split_list(value))
    if isinstance(value, (str, int, float)):
        return str(value).strip()
    return ""


def _text(raw: Mapping[str, Any], field: str) -> str:
    return _as_text(resolve(raw, FIELD_ALIASES[field], lambda value: bool(_as_text(value))))


def _as_date(value: Any) -> Optional[str]:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10]).isoformat()
        except ValueError:
            return None
    return None


def _as_score(value: Any, bounds: tuple[float, float]) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    low, high = bounds
    return min(high, max(low, number))


def _as_level(value: Any) -> str:
    text = _as_text(value)
    return text if text in LEVELS else ""


def _student_from(item: Any) -> Optional[Student]:
    if isinstance(item, Mapping):
        name = _as_text(item.get("name") or item.get("student_name"))
        student_id = _as_text(item.get("id") or item.get("student_id")) or name
    else:
        name = _as_text(item)
        student_id = name
    if not name:
        return None
    return Student(id=student_id, name=name)


def _students(raw: Mapping[str, Any]) -> tuple[Student, ...]:
    listed = resolve(raw, FIELD_ALIASES["students"])
    if isinstance(listed, (list, tuple)):
        candidates = [_student_from(item) for item in listed]
    elif raw.get("student_name"):
        candidates = [_student_from({"id": raw.get("student_id"), "name": raw.get("student_name")})]
    else:
        candidates = []

    students = []
    seen_ids, seen_names = set(), set()
    for student in candidates:
        if student is None or student.id in seen_ids or student.name in seen_names:
            continue
        seen_ids.add(student.id)
        seen_names.add(student.name)
        students.append(student)
    return tuple(students)


def normalize(raw: Any, settings: Settings = DEFAULT_SETTINGS) -> ActivityAnalysis:
    """Build a fully populated ActivityAnalysis from a loosely typed record.

    Never raises: anything unusable degrades to the field default.
    """

    if not isinstance(raw, Mapping):
        raw = {}

    duration = resolve(raw, FIELD_ALIASES["duration_minutes"], lambda value: coerce_minutes(value) is not None)
    score = resolve(
        raw,
        FIELD_ALIASES["score"],
        lambda value: _as_score(value, settings.score_range) is not None,
    )

    return ActivityAnalysis(
        students=_students(raw),
        date=_as_date(resolve(raw, FIELD_ALIASES["date"], lambda value: _as_date(value) is not None)),
        activity_name=_text(raw, "activity_name"),
        activity_type=_text(raw, "activity_type"),
        note=_text(raw, "note"),
        duration_minutes=coerce_minutes(duration),
        level=_as_level(resolve(raw, FIELD_ALIASES["level"], lambda value: bool(_as_level(value)))),
        ability=split_list(resolve(raw, FIELD_ALIASES["ability"])),
        score=_as_score(score, settings.score_range),
        score_explanation=_text(raw, "score_explanation"),
        emotion_summary=_text(raw, "emotion_summary"),
        emotion_cause=_text(raw, "emotion_cause"),
        observed_behaviors=_text(raw, "observed_behaviors"),
        emotion_tags=normalize_tags(resolve(raw, FIELD_ALIASES["emotion_tags"])),
        raw_text_cleaned=_text(raw, "raw_text_cleaned"),
    )
