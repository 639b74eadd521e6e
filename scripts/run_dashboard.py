"""Aggregate a CSV/JSON log-entry export into a dashboard report."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from activity_log_engine.adapters import csv_adapter, json_adapter
from activity_log_engine.aggregator import aggregate
from activity_log_engine.config import DEFAULT_SETTINGS, load_settings
from activity_log_engine.metrics import compute_metrics

log = logging.getLogger(__name__)


def _load_entries(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def _in_range(entry, start: str | None, end: str | None) -> bool:
    day = str(entry.log_date or entry.created_at or "")[:10]
    if start and (not day or day < start):
        return False
    if end and (not day or day > end):
        return False
    return True


def main() -> None:
    parser = argparse.ArgumentParser(description="Build the activity dashboard from exported log entries")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON log entries file")
    parser.add_argument("--config", help="Optional YAML settings file")
    parser.add_argument("--student", help="Only include entries for this student_id")
    parser.add_argument("--from", dest="start", help="First date to include (YYYY-MM-DD)")
    parser.add_argument("--to", dest="end", help="Last date to include (YYYY-MM-DD)")
    parser.add_argument("--output", default="outputs/dashboard.json", help="Where to save the report")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = load_settings(args.config) if args.config else DEFAULT_SETTINGS
        entries = _load_entries(Path(args.data))
    except (ValueError, FileNotFoundError) as exc:
        parser.exit(2, f"error: {exc}\n")

    if args.student:
        entries = [entry for entry in entries if entry.student_id == args.student]
    entries = [entry for entry in entries if _in_range(entry, args.start, args.end)]
    log.info("Aggregating %d log entries", len(entries))

    view = aggregate(entries, settings)
    report = {**view.to_dict(), "metrics": compute_metrics(view)}

    print(json.dumps(report, indent=2, ensure_ascii=False))

    out_path = Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(json.dumps(report, indent=2, ensure_ascii=False), encoding="utf-8")
    log.info("Saved dashboard report to %s", out_path)


if __name__ == "__main__":
    main()
