import json

from core_logging import bind_request_id, current_request_id, reset_request_id


def test_bound_request_id_is_injected(captured_log):
    token = bind_request_id("req-42")
    try:
        assert current_request_id() == "req-42"
        captured_log.logger.info("handled")
    finally:
        reset_request_id(token)
    assert current_request_id() is None
    captured_log.logger.info("after")

    first, second = captured_log.records()
    assert first["request_id"] == "req-42"
    assert "request_id" not in second


def test_explicit_request_id_wins(captured_log):
    token = bind_request_id("bound")
    try:
        captured_log.logger.info("x", request_id="explicit")
    finally:
        reset_request_id(token)
    assert captured_log.records()[0]["request_id"] == "explicit"


def test_child_loggers_propagate_to_root_handler(captured_log):
    from core_logging import get_logger

    child = get_logger(f"{captured_log.logger.name}.child")
    child.info("from.child", step=1)
    rec = captured_log.records()[0]
    assert rec["event"] == "from.child"
    assert rec["service"] == f"{captured_log.logger.name}.child"
    assert rec["meta"] == {"step": 1}
