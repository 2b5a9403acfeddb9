import asyncio, logging
from typing import Awaitable, Optional, TypeVar

T = TypeVar("T")


async def run_with_timeout(
    task: Awaitable[T],
    timeout_s: Optional[float],
    logger: logging.Logger,
    *,
    stage: str = "call",
) -> T:
    """Await *task* under an optional budget; raises TimeoutError on expiry.

    ``None`` means no budget. Cancellation of the caller propagates unchanged.
    """
    if timeout_s is None:
        return await task
    try:
        return await asyncio.wait_for(task, timeout_s)
    except asyncio.TimeoutError:
        logger.warning("stage_timeout", extra={"stage": stage, "timeout_s": timeout_s})
        raise
