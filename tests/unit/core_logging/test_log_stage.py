import logging

from core_logging import (
    cache_key_fp,
    log_cache_error,
    log_cache_miss,
    log_stage,
)


def test_log_stage_imperative(captured_log):
    log_stage(captured_log.logger, "queue", "published", message_id="m-1")
    rec = captured_log.records()[0]
    assert rec["event"] == "published"
    assert rec["stage"] == "queue"
    assert rec["meta"] == {"message_id": "m-1"}


def test_log_stage_emits_exactly_one_line_at_level(captured_log):
    assert log_stage(captured_log.logger, "http", "request.fault", level=logging.ERROR) is None
    recs = captured_log.records()
    assert len(recs) == 1
    assert recs[0]["level"] == "ERROR"


def test_cache_helpers_fingerprint_keys(captured_log):
    log_cache_miss(captured_log.logger, key="user:42")
    log_cache_error(captured_log.logger, key="user:42", event="cache.set_failed",
                    error=RuntimeError("down"))
    miss, err = captured_log.records()
    assert miss["key_fp"] == cache_key_fp("user:42")
    assert miss["meta"]["reason"] == "absent"
    assert err["level"] == "WARNING"
    assert err["error"] == "down"
    assert "user:42" not in captured_log.buf.getvalue()
