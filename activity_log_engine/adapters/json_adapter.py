"""JSON adapter for persisted log entries."""

from __future__ import annotations

import json
from datetime import date

from activity_log_engine.schema import LogEntry

_LIST_WRAPPERS = ("items", "log_entries", "data")


def _parse_item(item: dict, index: int) -> LogEntry:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")

    log_date = item.get("log_date")
    if log_date is not None:
        try:
            date.fromisoformat(str(log_date)[:10])
        except ValueError as exc:
            raise ValueError(f"Item {index}: malformed log_date") from exc

    tags = item.get("activity_tags")
    if tags is not None and not isinstance(tags, (list, str)):
        raise ValueError(f"Item {index}: invalid activity_tags")

    metrics = item.get("related_metrics")
    if metrics is not None and not isinstance(metrics, (dict, list)):
        raise ValueError(f"Item {index}: invalid related_metrics")

    return LogEntry.from_row(item)


def parse(file_path: str) -> list[LogEntry]:
    """Parse a JSON file (a list of rows or an ``{items: [...]}`` wrapper) into log entries."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if isinstance(payload, dict):
        for key in _LIST_WRAPPERS:
            if isinstance(payload.get(key), list):
                payload = payload[key]
                break

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    return [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
