from activity_log_engine.extraction import (
    normalize_extracted,
    parse_json_from_text,
    records_from_response,
    to_raw_record,
)
from activity_log_engine.schema import Student


def test_parse_json_from_fenced_text():
    assert parse_json_from_text('```json\n{"records": []}\n```') == {"records": []}
    assert parse_json_from_text('```\n[1, 2]\n```') == [1, 2]


def test_parse_json_from_text_failure_returns_none():
    assert parse_json_from_text("not json") is None
    assert parse_json_from_text("") is None
    assert parse_json_from_text(None) is None


def test_records_from_response_shapes():
    record = {"activity_title": "a"}
    assert records_from_response({"parsed": {"records": [record]}}) == [record]
    assert records_from_response({"records": [record, "junk"]}) == [record]
    assert records_from_response([record]) == [record]
    assert records_from_response(None) == []


def test_to_raw_record_flattens_emotions():
    raw = to_raw_record(
        {
            "emotions": [
                {"label": "기쁨", "intensity": 4, "reason": "열매를 땄다"},
                {"label": "뿌듯", "intensity": 3, "reason": ""},
            ]
        }
    )
    assert raw["emotion_keywords"] == ["기쁨", "뿌듯"]
    assert raw["emotion_reason"] == "열매를 땄다"
    assert raw["emotionSummary"] == "기쁨, 뿌듯"


def test_normalize_extracted_end_to_end():
    text = """```json
    {"records": [{"student_name": "지우", "date": "2025-11-12", "activity_title": "방울토마토 수확",
      "activity_type": "수확 활동", "duration_minutes": 50,
      "ability_analysis": {"main_abilities": ["소근육"], "level": "우수", "comment": "집중함"},
      "emotions": [{"label": "기쁨", "intensity": 4, "reason": "직접 땄다"}],
      "teacher_comment": "스스로 정리함"}]}
    ```"""
    [analysis] = normalize_extracted(text)
    assert analysis.students == (Student("지우", "지우"),)
    assert analysis.date == "2025-11-12"
    assert analysis.activity_name == "방울토마토 수확"
    assert analysis.duration_minutes == 50
    assert analysis.level == "우수"
    assert analysis.emotion_tags == {"기쁨"}
    assert analysis.emotion_summary == "기쁨"
    assert analysis.emotion_cause == "직접 땄다"


def test_normalize_extracted_bad_text():
    assert normalize_extracted("oops") == []


def test_normalize_extracted_oversized_duration():
    text = '{"records": [{"student_name": "지우", "duration_minutes": ' + "9" * 400 + "}]}"
    [analysis] = normalize_extracted(text)
    assert analysis.duration_minutes is None
    assert analysis.students == (Student("지우", "지우"),)


def test_normalize_extracted_ignores_non_list_emotions():
    for emotions in ("5", "true", '"기쁨"'):
        text = '{"records": [{"student_name": "지우", "emotions": ' + emotions + "}]}"
        [analysis] = normalize_extracted(text)
        assert analysis.students == (Student("지우", "지우"),)
        assert analysis.emotion_tags == frozenset()
