"""Streamlit demo UI for activity-log-engine."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

from activity_log_engine.adapters import csv_adapter, json_adapter
from activity_log_engine.aggregator import aggregate
from activity_log_engine.duration import split_duration
from activity_log_engine.metrics import compute_metrics
from activity_log_engine.report import ReportCategory, build_report_input, build_report_prompt

DEMO_DATASET = "examples/sample_log_entries.json"


def _parse_entries_from_path(file_path: str) -> list:
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(file_path)
    if suffix == ".json":
        return json_adapter.parse(file_path)
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _parse_uploaded(uploaded_file) -> list:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        temp_path = handle.name
    try:
        return _parse_entries_from_path(temp_path)
    finally:
        os.unlink(temp_path)


def _filter_entries(entries: list, student_id: str, start: str, end: str) -> list:
    selected = []
    for entry in entries:
        if student_id and entry.student_id != student_id:
            continue
        day = str(entry.log_date or entry.created_at or "")[:10]
        if start and (not day or day < start):
            continue
        if end and (not day or day > end):
            continue
        selected.append(entry)
    return selected


def _fmt_minutes(total: int) -> str:
    split = split_duration(total)
    return f"{split.hours}시간 {split.minutes}분" if split.hours else f"{split.minutes}분"


def run_dashboard(entries: list, report_category: str) -> dict[str, Any]:
    """Aggregate entries and return a UI-friendly result payload."""

    view = aggregate(entries)
    payload = build_report_input(view, report_options={"category_code": report_category})
    return {
        "view": view,
        "metrics": compute_metrics(view),
        "prompt": build_report_prompt(report_category, None, None, payload),
    }


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Activity Dashboard Demo", layout="wide")
    st.title("Activity Log Dashboard")

    with st.sidebar:
        st.header("Controls")
        uploaded = st.file_uploader("Upload log entries", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        student_id = st.text_input("Student id", value="")
        start = st.text_input("From (YYYY-MM-DD)", value="")
        end = st.text_input("To (YYYY-MM-DD)", value="")
        category = st.selectbox(
            "Report category",
            options=[c.code for c in ReportCategory],
            format_func=lambda code: ReportCategory.parse(code).label,
        )
        run = st.button("Build dashboard", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Build dashboard**.")
        return

    if start and end and start > end:
        st.error("The start date cannot be after the end date.")
        return

    try:
        if use_demo:
            entries = _parse_entries_from_path(DEMO_DATASET)
            data_source = f"demo dataset ({DEMO_DATASET})"
        elif uploaded is not None:
            entries = _parse_uploaded(uploaded)
            data_source = f"uploaded file ({uploaded.name})"
        else:
            st.error("Please upload a CSV/JSON file or enable 'Load demo dataset'.")
            return

        entries = _filter_entries(entries, student_id.strip(), start.strip(), end.strip())
        result = run_dashboard(entries, category)
        view = result["view"]
        metrics = result["metrics"]

        st.success(f"Loaded {len(entries)} log entries from {data_source}.")

        st.subheader("A) Summary")
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Records", metrics["recordCount"])
        c2.metric("Active days", metrics["activeDays"])
        c3.metric("Total time", _fmt_minutes(metrics["totalMinutes"]))
        c4.metric("Top emotion", metrics["topEmotion"] or "-")

        st.subheader("B) Emotion distribution")
        st.table(view.emotion_distribution)

        st.subheader("C) Emotion timeline")
        for detail in view.emotion_details:
            st.write(f"**{detail['emotion']}** ({detail['totalCount']})")
            st.table([{**item, "activities": ", ".join(item["activities"])} for item in detail["items"]])

        st.subheader("D) Daily activity minutes")
        if view.activity_series:
            st.bar_chart(view.activity_series, x="date", y="minutes")
        else:
            st.write("No dated activity in the selected range.")

        st.subheader("E) Activity details")
        st.table(view.activity_details)

        with st.expander("Report prompt"):
            st.code(result["prompt"], language="markdown")

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
