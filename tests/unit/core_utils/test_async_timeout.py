import asyncio

import pytest

from core_utils import run_with_timeout


@pytest.mark.asyncio
async def test_no_budget_awaits(captured_log):
    async def f():
        return 5

    assert await run_with_timeout(f(), None, captured_log.logger) == 5


@pytest.mark.asyncio
async def test_expiry_raises_and_logs(captured_log):
    with pytest.raises(TimeoutError):
        await run_with_timeout(asyncio.sleep(1), 0.01, captured_log.logger, stage="cache")
    rec = captured_log.records()[-1]
    assert rec["event"] == "stage_timeout"
    assert rec["stage"] == "cache"
    assert rec["level"] == "WARNING"
