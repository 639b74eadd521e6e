"""Upload list view model helpers."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from activity_log_engine.config import DEFAULT_SETTINGS, Settings
from activity_log_engine.normalizer import normalize

STEP_KEYS = ("extract", "ai", "save")
UNNAMED_FILE = "이름 없는 파일"
UNKNOWN_STUDENT = "학생 미확인"


def normalize_uploads(payload: Any) -> list[dict]:
    """Accept a bare list or an ``{items}``/``{uploads}`` wrapper."""

    if isinstance(payload, list):
        items = payload
    elif isinstance(payload, Mapping) and isinstance(payload.get("items"), list):
        items = payload["items"]
    elif isinstance(payload, Mapping) and isinstance(payload.get("uploads"), list):
        items = payload["uploads"]
    else:
        return []
    return [item for item in items if isinstance(item, Mapping)]


def _percent(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def compute_overall_progress(steps: Any, fallback: Any = None) -> int:
    """Average the pipeline step percentages; missing steps count as zero."""

    if not isinstance(steps, Mapping):
        return int(_percent(fallback) or 0)
    total = sum(_percent(steps.get(key)) or 0.0 for key in STEP_KEYS)
    return int(total / len(STEP_KEYS) + 0.5)


def _first(raw: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value:
            return value
    return None


def hydrate_upload(raw: Mapping[str, Any], settings: Settings = DEFAULT_SETTINGS) -> dict:
    """Resolve display fields of one upload row and attach its normalized analysis."""

    student = raw.get("student") if isinstance(raw.get("student"), Mapping) else {}
    progress = _percent(raw.get("progress"))
    if progress is None:
        progress = _percent(raw.get("overall_progress"))

    steps = raw.get("steps")
    if not isinstance(steps, Mapping):
        base = progress or 0.0
        steps = {"extract": 100.0, "ai": base, "save": base}

    analysis = normalize(raw, settings)
    file_name = _first(raw, "file_name", "filename") or UNNAMED_FILE
    return {
        **raw,
        "id": str(_first(raw, "id", "upload_id", "uuid") or file_name),
        "file_name": file_name,
        "student_name": _first(raw, "student_name") or student.get("name") or UNKNOWN_STUDENT,
        "uploaded_at": _first(raw, "created_at", "uploaded_at", "uploadDate", "createdAt"),
        "status": raw.get("status") or "queued",
        "steps": dict(steps),
        "overall_progress": int(progress) if progress is not None else compute_overall_progress(steps),
        "raw_text": analysis.raw_text_cleaned or str(raw.get("raw_text") or ""),
        "analysis": analysis,
    }
