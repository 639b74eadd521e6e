"""Parsing of structured-extraction LLM responses into raw records."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping, Optional

from activity_log_engine.config import DEFAULT_SETTINGS, Settings
from activity_log_engine.normalizer import normalize
from activity_log_engine.schema import ActivityAnalysis

log = logging.getLogger(__name__)

_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"```$")


def parse_json_from_text(text: Optional[str]) -> Any:
    """Parse model output that may be wrapped in a Markdown code fence.

    Returns None when the text is empty or is not valid JSON.
    """

    if not text:
        return None
    cleaned = _FENCE_END.sub("", _FENCE_START.sub("", text.strip())).strip()
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError as exc:
        log.debug("Could not parse extraction response as JSON: %s", exc)
        return None


def records_from_response(payload: Any) -> list[dict]:
    """Return the record list from ``{parsed: {records}}``, ``{records}`` or a bare list."""

    if isinstance(payload, Mapping):
        parsed = payload.get("parsed")
        if isinstance(parsed, Mapping) and isinstance(parsed.get("records"), list):
            payload = parsed["records"]
        else:
            payload = payload.get("records")
    if not isinstance(payload, list):
        return []
    return [record for record in payload if isinstance(record, Mapping)]


def to_raw_record(record: Mapping[str, Any]) -> dict:
    """Flatten one extraction record so the normalizer's alias table can read it."""

    raw = dict(record)
    emotions = record.get("emotions")
    if not isinstance(emotions, (list, tuple)):
        emotions = []
    emotions = [item for item in emotions if isinstance(item, Mapping)]
    if emotions:
        labels = [str(item.get("label") or "").strip() for item in emotions]
        reasons = [str(item.get("reason") or "").strip() for item in emotions]
        raw.setdefault("emotion_keywords", [label for label in labels if label])
        raw.setdefault("emotion_reason", "; ".join(reason for reason in reasons if reason))
        raw.setdefault("emotionSummary", ", ".join(label for label in labels if label))
    return raw


def normalize_extracted(text: Optional[str], settings: Settings = DEFAULT_SETTINGS) -> list[ActivityAnalysis]:
    """Parse an extraction response and normalize every record it carries."""

    records = records_from_response(parse_json_from_text(text))
    log.debug("Normalizing %d extracted records", len(records))
    return [normalize(to_raw_record(record), settings) for record in records]
