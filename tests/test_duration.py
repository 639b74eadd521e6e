from activity_log_engine.duration import coerce_minutes, combine_duration, split_duration
from activity_log_engine.schema import DurationSplit


def test_split_duration():
    split = split_duration(125)
    assert split == DurationSplit(hours=2, minutes=5)
    assert split.hours * 60 + split.minutes == 125


def test_split_duration_invalid_inputs():
    assert split_duration(-5) == DurationSplit(0, 0)
    assert split_duration("abc") == DurationSplit(0, 0)
    assert split_duration(None) == DurationSplit(0, 0)


def test_combine_duration_inverts_split():
    for total in (0, 59, 60, 61, 125, 600):
        split = split_duration(total)
        assert combine_duration(split.hours, split.minutes) == total


def test_coerce_minutes():
    assert coerce_minutes("45") == 45
    assert coerce_minutes(30.9) == 30
    assert coerce_minutes(True) is None
    assert coerce_minutes(float("nan")) is None


def test_coerce_minutes_oversized_int():
    assert coerce_minutes(10**400) is None
    assert split_duration(10**400) == DurationSplit(0, 0)
