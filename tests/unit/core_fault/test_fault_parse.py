from core_fault import parse_validation_error


def _pairs(v):
    return [(e.field, e.message) for e in parse_validation_error(v)]


def test_none_and_empty():
    assert _pairs(None) == []
    assert _pairs("") == []
    assert _pairs(" ;  ; ") == []


def test_splits_on_first_colon_only():
    assert _pairs("url: must match: https") == [("url", "must match: https")]


def test_strips_single_trailing_period():
    assert _pairs("name: required..") == [("name", "required.")]


def test_segment_without_colon_is_general():
    assert _pairs("totally broken.") == [("general", "totally broken.")]


def test_order_preserved():
    assert [f for f, _ in _pairs("c: 1; a: 2; b: 3")] == ["c", "a", "b"]
