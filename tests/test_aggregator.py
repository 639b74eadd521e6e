from activity_log_engine.aggregator import aggregate, unwrap_metrics
from activity_log_engine.config import Settings
from activity_log_engine.schema import LogEntry


def sample_entries():
    return [
        LogEntry("2025-11-11", "기쁨", ["수확"], {"activity_name": "감자 캐기", "minutes": 40}, "크게 웃음"),
        LogEntry("2025-11-10", "기쁨", ["파종"], [{"activity": "씨앗 뿌리기"}], "조용히 참여"),
        LogEntry("2025-11-10", "슬픔", ["관리"], {"activity_name": "물주기", "duration_minutes": 20}, None),
    ]


def test_aggregate_empty():
    assert aggregate([]).to_dict() == {
        "recordCount": 0,
        "emotionDistribution": [],
        "emotionDetails": [],
        "activitySeries": [],
        "activityDetails": [],
    }


def test_emotion_distribution_counts_and_percentages():
    view = aggregate(sample_entries())
    assert view.record_count == 3
    assert view.emotion_distribution == [
        {"name": "기쁨", "count": 2, "value": 67},
        {"name": "슬픔", "count": 1, "value": 33},
    ]


def test_emotion_distribution_ties_keep_first_seen_order():
    entries = [{"emotion_tag": "슬픔"}, {"emotion_tag": "기쁨"}]
    names = [row["name"] for row in aggregate(entries).emotion_distribution]
    assert names == ["슬픔", "기쁨"]


def test_missing_emotion_is_unrecorded():
    view = aggregate([{"emotion_tag": None}, {"emotion_tag": "  "}])
    assert view.emotion_distribution == [{"name": "unrecorded", "count": 2, "value": 100}]

    custom = aggregate([{}], Settings(unrecorded_emotion="감정 미기록"))
    assert custom.emotion_distribution[0]["name"] == "감정 미기록"


def test_emotion_details_grouped_by_date():
    entries = sample_entries() + [
        LogEntry("2025-11-10", "기쁨", ["수확"], {"activity_name": "감자 캐기"}),
        LogEntry("2025-11-10", "기쁨", ["수확"], {"activity_name": "감자 캐기"}),
    ]
    details = aggregate(entries).emotion_details
    assert [d["emotion"] for d in details] == ["기쁨", "슬픔"]
    assert details[0]["totalCount"] == 4
    assert details[0]["items"] == [
        {"date": "2025-11-10", "count": 3, "activities": ["감자 캐기", "씨앗 뿌리기"]},
        {"date": "2025-11-11", "count": 1, "activities": ["감자 캐기"]},
    ]


def test_activity_series_minutes_and_order():
    view = aggregate(sample_entries())
    # 30 default minutes for the entry without a duration
    assert view.activity_series == [
        {"date": "2025-11-10", "minutes": 50},
        {"date": "2025-11-11", "minutes": 40},
    ]


def test_wrapped_and_plain_metrics_contribute_equally():
    plain = aggregate([{"log_date": "2025-11-10", "related_metrics": {"minutes": 45}}])
    wrapped = aggregate([{"log_date": "2025-11-10", "related_metrics": [{"minutes": 45}]}])
    assert plain.activity_series == wrapped.activity_series == [{"date": "2025-11-10", "minutes": 45}]


def test_entry_without_duration_contributes_default():
    view = aggregate([{"log_date": "2025-11-10"}])
    assert view.activity_series == [{"date": "2025-11-10", "minutes": 30}]

    custom = aggregate([{"log_date": "2025-11-10"}], Settings(default_session_minutes=50))
    assert custom.activity_series == [{"date": "2025-11-10", "minutes": 50}]


def test_created_at_fallback_and_undated_entries():
    entries = [
        {"created_at": "2025-11-12T08:00:00Z", "related_metrics": {"minutes": 10}},
        {"related_metrics": {"minutes": 99}, "emotion_tag": "기쁨"},
    ]
    view = aggregate(entries)
    assert view.activity_series == [{"date": "2025-11-12", "minutes": 10}]
    assert view.record_count == 2
    assert view.emotion_details[1]["items"] == []


def test_activity_details_never_drop_rows():
    entries = sample_entries() + [{"related_metrics": "garbage"}, {"related_metrics": [], "activity_tags": "관찰"}]
    details = aggregate(entries).activity_details
    assert len(details) == 5
    assert details[1] == {
        "date": "2025-11-10",
        "activity": "씨앗 뿌리기",
        "category": "",
        "activityType": "",
        "comment": "조용히 참여",
        "emotion": "기쁨",
    }
    assert details[3] == {"date": "", "activity": "", "category": "", "activityType": "", "comment": "", "emotion": ""}
    assert details[4]["activity"] == "관찰"


def test_activity_details_resolve_aliases():
    row = {
        "log_date": "2025-11-10",
        "activity_tags": ["수확"],
        "related_metrics": [{"main_type": "수확", "group_type": "그룹", "activity": "토마토 따기"}],
    }
    detail = aggregate([row]).activity_details[0]
    assert detail["activity"] == "토마토 따기"
    assert detail["category"] == "수확"
    assert detail["activityType"] == "그룹"


def test_unwrap_metrics():
    assert unwrap_metrics([{"minutes": 5}]) == {"minutes": 5}
    assert unwrap_metrics({"minutes": 5}) == {"minutes": 5}
    assert unwrap_metrics(["x"]) == {}
    assert unwrap_metrics(None) == {}


def test_oversized_minutes_fall_back_to_default():
    row = {"log_date": "2025-11-10", "related_metrics": {"minutes": 10**400}}
    assert aggregate([row]).activity_series == [{"date": "2025-11-10", "minutes": 30}]


def test_fractional_minutes_are_truncated():
    row = {"log_date": "2025-11-10", "related_metrics": [{"minutes": 45.5}]}
    assert aggregate([row]).activity_series == [{"date": "2025-11-10", "minutes": 45}]
