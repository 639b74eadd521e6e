"""Demo script for activity-log-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from activity_log_engine.adapters.json_adapter import parse
from activity_log_engine.aggregator import aggregate
from activity_log_engine.duration import split_duration
from activity_log_engine.extraction import normalize_extracted
from activity_log_engine.log_builder import build_log_rows
from activity_log_engine.metrics import compute_metrics

EXTRACTION_RESPONSE = """```json
{"records": [{"student_name": "지우", "date": "2025-11-12", "activity_title": "방울토마토 수확",
  "activity_type": "수확 및 관찰 활동", "duration_minutes": 50,
  "ability_analysis": {"main_abilities": ["소근육", "집중력"], "level": "우수", "comment": "끝까지 집중함"},
  "emotions": [{"label": "기쁨", "intensity": 4, "reason": "열매를 직접 땄다"}],
  "behavior_tags": ["웃음", "친구에게 보여줌"], "teacher_comment": "수확 바구니를 스스로 정리함"}]}
```"""


def main() -> None:
    for analysis in normalize_extracted(EXTRACTION_RESPONSE):
        print("Analysis:", analysis.to_dict())
        print("Duration:", split_duration(analysis.duration_minutes))
        print("Rows:", build_log_rows(analysis, file_name="demo.txt"))

    entries = parse("examples/sample_log_entries.json")
    view = aggregate(entries)
    print("Dashboard:", view.to_dict())
    print("Metrics:", compute_metrics(view))


if __name__ == "__main__":
    main()
