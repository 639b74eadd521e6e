"""Conversion of edited analyses into persisted log rows."""

from __future__ import annotations

import logging
import uuid
from datetime import date
from typing import Any, Mapping, Optional

from activity_log_engine.activity_types import ActivityCategory, match_activity_types, selected_labels
from activity_log_engine.schema import ActivityAnalysis

log = logging.getLogger(__name__)

STUDENT_TAG_PREFIX = "학생:"


def is_uuid(value: Any) -> bool:
    if not value:
        return False
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def _related_metrics(analysis: ActivityAnalysis) -> list[dict]:
    metrics = {
        "activity_name": analysis.activity_name,
        "activity_type": analysis.activity_type,
        "minutes": analysis.duration_minutes,
        "level": analysis.level,
        "ability": list(analysis.ability),
        "score": analysis.score,
        "score_explanation": analysis.score_explanation,
        "emotion_summary": analysis.emotion_summary,
        "emotion_cause": analysis.emotion_cause,
        "observed_behaviors": analysis.observed_behaviors,
        "emotion_tags": sorted(analysis.emotion_tags),
        "note": analysis.note,
    }
    # Storage column is jsonb[]; always wrap.
    return [metrics]


def build_log_rows(
    analysis: ActivityAnalysis,
    activity_types: Optional[Mapping[ActivityCategory, Any]] = None,
    file_name: Optional[str] = None,
    today: Optional[date] = None,
) -> list[dict]:
    """Build one log row per participating student.

    Category selections default to matching the analysis' free-text activity type.
    """

    if activity_types is None:
        activity_types = match_activity_types(analysis.activity_type)
    tags = selected_labels(activity_types)
    if analysis.activity_name and analysis.activity_name not in tags:
        tags.append(analysis.activity_name)

    tags_sorted = sorted(analysis.emotion_tags)
    base = {
        "log_date": analysis.date or (today or date.today()).isoformat(),
        "emotion_tag": tags_sorted[0] if tags_sorted else (analysis.emotion_summary or None),
        "log_content": analysis.raw_text_cleaned or analysis.note or None,
        "source_file_path": file_name or None,
    }
    return [
        {
            **base,
            "student_id": student.id,
            "student_name": student.name,
            "activity_tags": list(tags) or None,
            "related_metrics": _related_metrics(analysis),
        }
        for student in analysis.students
    ]


def attach_student_ids(rows: list[dict], name_to_id: Mapping[str, str]) -> list[dict]:
    """Resolve non-UUID student ids through a name directory.

    Rows resolved by name gain a ``학생:<name>`` activity tag; rows that cannot be
    tied to a student are dropped.
    """

    resolved = []
    for row in rows:
        student_id = str(row.get("student_id") or "")
        if is_uuid(student_id):
            resolved.append(dict(row))
            continue

        name = str(row.get("student_name") or "").strip()
        if not name or name not in name_to_id:
            log.warning("Dropping log row without a resolvable student (name=%r)", name)
            continue

        tags = list(row.get("activity_tags") or [])
        label = f"{STUDENT_TAG_PREFIX}{name}"
        if label not in tags:
            tags.append(label)
        resolved.append({**row, "student_id": name_to_id[name], "activity_tags": tags})
    return resolved
