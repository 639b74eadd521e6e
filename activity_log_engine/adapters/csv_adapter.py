"""CSV adapter for persisted log entries."""

from __future__ import annotations

import csv
import json
from datetime import date

from activity_log_engine.schema import LogEntry

_TAG_SEPARATOR = ";"


def _parse_tags(value: str, row_number: int):
    value = value.strip()
    if not value:
        return None
    if value.startswith("["):
        try:
            tags = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Row {row_number}: malformed activity_tags") from exc
        if not isinstance(tags, list):
            raise ValueError(f"Row {row_number}: activity_tags must be a list")
        return tags
    return [tag.strip() for tag in value.split(_TAG_SEPARATOR) if tag.strip()]


def _parse_metrics(value: str, row_number: int):
    value = value.strip()
    if not value:
        return None
    try:
        metrics = json.loads(value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Row {row_number}: malformed related_metrics") from exc
    if not isinstance(metrics, (dict, list)):
        raise ValueError(f"Row {row_number}: related_metrics must be an object or array")
    return metrics


def _parse_row(row: dict, row_number: int) -> LogEntry:
    def text(field: str):
        value = (row.get(field) or "").strip()
        return value or None

    log_date = text("log_date")
    if log_date:
        try:
            date.fromisoformat(log_date[:10])
        except ValueError as exc:
            raise ValueError(f"Row {row_number}: malformed log_date") from exc

    return LogEntry(
        log_date=log_date,
        emotion_tag=text("emotion_tag"),
        activity_tags=_parse_tags(row.get("activity_tags") or "", row_number),
        related_metrics=_parse_metrics(row.get("related_metrics") or "", row_number),
        log_content=text("log_content"),
        created_at=text("created_at"),
        student_id=text("student_id"),
    )


def parse(file_path: str) -> list[LogEntry]:
    """Parse CSV file into a list of log entries.

    ``related_metrics`` holds JSON; ``activity_tags`` is JSON or ``;``-separated.
    """

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        entries: list[LogEntry] = []
        for row_number, row in enumerate(reader, start=2):
            entries.append(_parse_row(row, row_number))
        return entries
