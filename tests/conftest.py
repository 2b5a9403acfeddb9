"""
Global conftest.

1. A pretty unified-diff assertion helper for clearer dict-vs-dict failures.
2. Shared fixtures: a captured JSON logger and an in-memory async Redis.
"""

import io
import json
import difflib
import uuid

import pytest
import pytest_asyncio

from core_logging import get_logger

# --------------------------------------------------------------------------- #
# Pretty diff for dict comparisons                                            #
# --------------------------------------------------------------------------- #
def pytest_assertrepr_compare(op, left, right):
    """Pretty unified-diff output when comparing two dicts with ==."""
    if isinstance(left, dict) and isinstance(right, dict) and op == "==":
        lhs = json.dumps(left, indent=2, sort_keys=True).splitlines()
        rhs = json.dumps(right, indent=2, sort_keys=True).splitlines()
        return [""] + list(
            difflib.unified_diff(lhs, rhs, fromfile="left", tofile="right")
        )


class CapturedLog:
    """JSON log lines written by a test logger, parsed on demand."""

    def __init__(self, logger, buf: io.StringIO):
        self.logger = logger
        self.buf = buf

    def records(self) -> list[dict]:
        out = []
        for line in self.buf.getvalue().splitlines():
            line = line.strip()
            if line:
                out.append(json.loads(line))
        return out

    def events(self) -> list[str]:
        return [r["event"] for r in self.records()]


@pytest.fixture
def captured_log():
    """A fresh production-format logger writing into a buffer."""
    buf = io.StringIO()
    name = f"test{uuid.uuid4().hex[:8]}"
    logger = get_logger(name, "DEBUG", environment="production", stream=buf)
    return CapturedLog(logger, buf)


@pytest_asyncio.fixture
async def fake_redis():
    """In-memory ``redis.asyncio``-compatible client."""
    import fakeredis

    r = fakeredis.FakeAsyncRedis(decode_responses=True)
    try:
        yield r
    finally:
        await r.aclose()
