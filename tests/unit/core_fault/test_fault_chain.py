import core_fault


def test_get_tag_of_none_and_plain_errors():
    assert core_fault.get_tag(None) == core_fault.UNTAGGED
    assert core_fault.get_tag(RuntimeError("x")) == core_fault.UNTAGGED


def test_get_tag_finds_nested_fault():
    inner = core_fault.not_found("user")
    try:
        try:
            raise inner
        except core_fault.Fault as e:
            raise RuntimeError("handler failed") from e
    except RuntimeError as outer:
        assert core_fault.get_tag(outer) == core_fault.NOT_FOUND
        assert core_fault.find_fault(outer) is inner


def test_get_tag_prefers_outermost_fault():
    inner = core_fault.not_found("row")
    outer = core_fault.internal_server_error("load failed", cause=inner)
    assert core_fault.get_tag(outer) == core_fault.INTERNAL_SERVER_ERROR


def test_iter_chain_ignores_implicit_context():
    try:
        try:
            raise KeyError("a")
        except KeyError:
            raise ValueError("b")
    except ValueError as e:
        chain = list(core_fault.iter_chain(e))
    assert len(chain) == 1


def test_iter_chain_stops_on_cycles():
    a = RuntimeError("a")
    b = RuntimeError("b")
    a.__cause__ = b
    b.__cause__ = a
    assert list(core_fault.iter_chain(a)) == [a, b]


def test_is_requires_matching_tag():
    nf = core_fault.not_found("x")
    assert nf.is_(core_fault.not_found("y"))
    assert not nf.is_(core_fault.bad_request("y"))
    assert not nf.is_(RuntimeError("y"))


def test_matches_walks_chain():
    err = core_fault.internal_server_error("wrap", cause=core_fault.not_found("row"))
    assert core_fault.matches(err, core_fault.not_found(""))
    assert not core_fault.matches(err, core_fault.conflict(""))
    sentinel = KeyError("k")
    assert core_fault.matches(core_fault.new("m", cause=sentinel), sentinel)
