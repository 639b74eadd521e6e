from activity_log_engine.tags import normalize_tags, split_list


def test_normalize_tags_splits_mixed_separators():
    assert normalize_tags("기쁨, 안정/편안") == {"기쁨", "안정", "편안"}


def test_normalize_tags_list_input():
    assert normalize_tags([" 기쁨 ", "", None, "기쁨", 3]) == {"기쁨", "3"}


def test_normalize_tags_absent_values():
    assert normalize_tags(None) == frozenset()
    assert normalize_tags("") == frozenset()
    assert normalize_tags({"label": "기쁨"}) == frozenset()


def test_normalize_tags_idempotent():
    for value in ("기쁨, 안정/편안", ["  슬픔", "분노 ", ""], "a,,b//c  d", None):
        once = normalize_tags(value)
        assert normalize_tags(list(once)) == once


def test_split_list_keeps_order_without_duplicates():
    assert split_list("b, a/b") == ("b", "a")
    assert split_list(None) == ()
