"""Dashboard aggregation over persisted log entries."""

from __future__ import annotations

from collections import Counter, defaultdict
from typing import Any, Iterable, Mapping, Optional, Union

from activity_log_engine.config import DEFAULT_SETTINGS, Settings
from activity_log_engine.duration import coerce_minutes
from activity_log_engine.schema import DashboardView, LogEntry

ACTIVITY_KEYS = ("activity_name", "activity")
CATEGORY_KEYS = ("category", "activity_category", "main_type")
ACTIVITY_TYPE_KEYS = ("activity_type", "activityType", "group_type")
MINUTES_KEYS = ("minutes", "duration_minutes")


def _as_entry(item: Union[LogEntry, Mapping[str, Any]]) -> LogEntry:
    if isinstance(item, LogEntry):
        return item
    if isinstance(item, Mapping):
        return LogEntry.from_row(item)
    return LogEntry()


def unwrap_metrics(value: Any) -> Mapping[str, Any]:
    """Accept ``related_metrics`` as an object or a one-element array of one."""

    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    return value if isinstance(value, Mapping) else {}


def _first_text(metrics: Mapping[str, Any], keys: Iterable[str]) -> str:
    for key in keys:
        value = metrics.get(key)
        if value is not None and not isinstance(value, (Mapping, list, tuple)):
            text = str(value).strip()
            if text:
                return text
    return ""


def _entry_date(entry: LogEntry) -> Optional[str]:
    if entry.log_date:
        return str(entry.log_date)[:10]
    if entry.created_at:
        return str(entry.created_at)[:10]
    return None


def _activity_name(entry: LogEntry, metrics: Mapping[str, Any]) -> str:
    name = _first_text(metrics, ACTIVITY_KEYS)
    if name:
        return name
    tags = entry.activity_tags
    if isinstance(tags, str):
        tags = [tags]
    if isinstance(tags, (list, tuple)) and tags and tags[0] is not None:
        return str(tags[0]).strip()
    return ""


def _entry_minutes(metrics: Mapping[str, Any], default: int) -> int:
    for key in MINUTES_KEYS:
        minutes = coerce_minutes(metrics.get(key))
        if minutes is not None:
            return minutes
    return default


def _percentage(count: int, total: int) -> int:
    if total <= 0:
        return 0
    # Half rounds up, matching the dashboard's rendering.
    return int(count * 100 / total + 0.5)


def emotion_distribution(emotions: list[str]) -> list[dict]:
    counts = Counter(emotions)
    total = len(emotions)
    rows = [{"name": name, "count": count, "value": _percentage(count, total)} for name, count in counts.items()]
    return sorted(rows, key=lambda row: row["count"], reverse=True)


def activity_series(minutes_by_date: Mapping[str, int]) -> list[dict]:
    return [{"date": day, "minutes": minutes_by_date[day]} for day in sorted(minutes_by_date)]


def aggregate(
    entries: Iterable[Union[LogEntry, Mapping[str, Any]]],
    settings: Settings = DEFAULT_SETTINGS,
) -> DashboardView:
    """Aggregate already-filtered log entries into chart-ready dashboard series."""

    emotions: list[str] = []
    detail_totals: Counter = Counter()
    detail_dates: dict[str, dict[str, dict]] = defaultdict(dict)
    minutes_by_date: dict[str, int] = defaultdict(int)
    activity_details: list[dict] = []

    for item in entries:
        entry = _as_entry(item)
        metrics = unwrap_metrics(entry.related_metrics)
        day = _entry_date(entry)
        tag = str(entry.emotion_tag).strip() if entry.emotion_tag is not None else ""
        emotion = tag or settings.unrecorded_emotion
        activity = _activity_name(entry, metrics)

        emotions.append(emotion)
        detail_totals[emotion] += 1
        if day:
            bucket = detail_dates[emotion].setdefault(day, {"count": 0, "activities": set()})
            bucket["count"] += 1
            if activity:
                bucket["activities"].add(activity)
            minutes_by_date[day] += _entry_minutes(metrics, settings.default_session_minutes)

        activity_details.append(
            {
                "date": day or "",
                "activity": activity,
                "category": _first_text(metrics, CATEGORY_KEYS),
                "activityType": _first_text(metrics, ACTIVITY_TYPE_KEYS),
                "comment": str(entry.log_content or ""),
                "emotion": tag,
            }
        )

    emotion_details = [
        {
            "emotion": emotion,
            "totalCount": total,
            "items": [
                {
                    "date": day,
                    "count": detail_dates[emotion][day]["count"],
                    "activities": sorted(detail_dates[emotion][day]["activities"]),
                }
                for day in sorted(detail_dates[emotion])
            ],
        }
        for emotion, total in detail_totals.items()
    ]
    emotion_details.sort(key=lambda detail: detail["totalCount"], reverse=True)

    return DashboardView(
        record_count=len(emotions),
        emotion_distribution=emotion_distribution(emotions),
        emotion_details=emotion_details,
        activity_series=activity_series(minutes_by_date),
        activity_details=activity_details,
    )
