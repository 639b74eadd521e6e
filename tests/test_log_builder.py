from datetime import date

from activity_log_engine.activity_types import ActivityCategory
from activity_log_engine.aggregator import aggregate
from activity_log_engine.log_builder import attach_student_ids, build_log_rows, is_uuid
from activity_log_engine.normalizer import normalize

STUDENT_UUID = "6f1c2a8e-3b4d-4c5e-8f90-1a2b3c4d5e6f"


def sample_analysis():
    return normalize(
        {
            "students": [{"id": STUDENT_UUID, "name": "지우"}, {"id": "ai-2", "name": "민서"}],
            "date": "2025-11-12",
            "activityName": "방울토마토 수확",
            "activityType": "수확 및 관찰 활동",
            "durationMinutes": 50,
            "emotionTags": ["안정", "기쁨"],
            "rawTextCleaned": "토마토를 땄다",
        }
    )


def test_build_log_rows_one_row_per_student():
    rows = build_log_rows(sample_analysis(), file_name="note.txt")
    assert [row["student_id"] for row in rows] == [STUDENT_UUID, "ai-2"]
    row = rows[0]
    assert row["log_date"] == "2025-11-12"
    assert row["emotion_tag"] == "기쁨"
    assert row["activity_tags"] == ["수확", "관찰", "방울토마토 수확"]
    assert row["log_content"] == "토마토를 땄다"
    assert row["source_file_path"] == "note.txt"
    assert isinstance(row["related_metrics"], list)
    assert row["related_metrics"][0]["minutes"] == 50


def test_build_log_rows_explicit_selection_and_default_date():
    analysis = normalize({"students": ["하늘"], "activityName": "물주기"})
    rows = build_log_rows(analysis, {ActivityCategory.MANAGEMENT: {"selected": True}}, today=date(2025, 1, 2))
    assert rows[0]["log_date"] == "2025-01-02"
    assert rows[0]["activity_tags"] == ["관리", "물주기"]
    assert rows[0]["emotion_tag"] is None


def test_build_log_rows_without_students():
    assert build_log_rows(normalize({})) == []


def test_rows_round_trip_through_aggregator():
    view = aggregate(build_log_rows(sample_analysis()))
    assert view.activity_series == [{"date": "2025-11-12", "minutes": 100}]
    assert view.activity_details[0]["activity"] == "방울토마토 수확"


def test_attach_student_ids():
    rows = [
        {"student_id": STUDENT_UUID, "student_name": "지우", "activity_tags": ["수확"]},
        {"student_id": "ai-2", "student_name": "민서", "activity_tags": None},
        {"student_id": "", "student_name": "미확인"},
        {"student_id": "local-1", "student_name": ""},
    ]
    resolved = attach_student_ids(rows, {"민서": "uuid-minseo"})
    assert len(resolved) == 2
    assert resolved[0]["student_id"] == STUDENT_UUID
    assert resolved[1]["student_id"] == "uuid-minseo"
    assert resolved[1]["activity_tags"] == ["학생:민서"]


def test_is_uuid():
    assert is_uuid(STUDENT_UUID)
    assert not is_uuid("ai-2")
    assert not is_uuid(None)
