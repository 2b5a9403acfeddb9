from __future__ import annotations
import asyncio
import functools
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

import core_fault
from core_config import Settings, get_settings
from core_config.constants import SQS_MAX_MESSAGES, SQS_WAIT_TIME_S
from core_logging import log_stage
from core_utils import jsonx

_SDK_ERRORS = (BotoCoreError, ClientError)

@dataclass(frozen=True)
class Message:
    id: str
    body: str
    receipt_handle: str

    def json(self) -> Any:
        """Decoded JSON body."""
        return jsonx.loads(self.body)

def _queue_fault(message: str, cause: BaseException) -> core_fault.Fault:
    return core_fault.internal_server_error(message, cause=cause)

class QueueClient:
    """
    SQS queue wrapper: JSON publish, long-poll consume, delete by receipt.

    boto3 is blocking, so every SDK call runs in the default executor. Pass
    ``client`` to reuse an existing boto3 SQS client (or a stub in tests);
    otherwise one is built for ``region`` from the standard AWS credential
    chain.
    """
    def __init__(
        self,
        queue_url: str,
        *,
        region: Optional[str] = None,
        client: Any = None,
        logger: logging.Logger,
    ):
        if not queue_url:
            raise ValueError("QueueClient requires a queue_url")
        if logger is None:
            raise ValueError("QueueClient requires a logger")
        self.queue_url = queue_url
        self.logger = logger
        self._sqs = client if client is not None else boto3.client("sqs", region_name=region)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, *, client: Any = None,
                      logger: logging.Logger) -> "QueueClient":
        s = settings or get_settings()
        return cls(s.sqs_queue_url or "", region=s.sqs_region, client=client, logger=logger)

    async def _call(self, fn: Callable[..., Any], **kwargs: Any) -> Any:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, functools.partial(fn, **kwargs))

    async def publish(self, message: Any) -> str:
        """Send *message* as a JSON body; returns the SQS message id."""
        try:
            body = jsonx.dumps_strict(message, sort_keys=False)
        except TypeError as e:
            raise _queue_fault("sqs: failed to marshal JSON", e) from e
        t0 = time.perf_counter()
        try:
            resp = await self._call(self._sqs.send_message, QueueUrl=self.queue_url, MessageBody=body)
        except _SDK_ERRORS as e:
            log_stage(self.logger, "queue", "publish_failed", level=logging.WARNING,
                      error=str(e), error_type=e.__class__.__name__)
            raise _queue_fault("sqs: failed to publish message", e) from e
        message_id = (resp or {}).get("MessageId", "")
        log_stage(self.logger, "queue", "published", message_id=message_id, bytes=len(body),
                  latency_ms=round((time.perf_counter() - t0) * 1000, 3))
        return message_id

    async def consume(
        self,
        max_messages: int = SQS_MAX_MESSAGES,
        wait_time_s: int = SQS_WAIT_TIME_S,
    ) -> list[Message]:
        """Long-poll up to *max_messages* (1..10) for at most *wait_time_s* seconds."""
        try:
            resp = await self._call(
                self._sqs.receive_message,
                QueueUrl=self.queue_url,
                MaxNumberOfMessages=max_messages,
                WaitTimeSeconds=wait_time_s,
            )
        except _SDK_ERRORS as e:
            log_stage(self.logger, "queue", "consume_failed", level=logging.WARNING,
                      error=str(e), error_type=e.__class__.__name__)
            raise _queue_fault("sqs: failed to consume messages", e) from e
        messages = [
            Message(
                id=m.get("MessageId", ""),
                body=m.get("Body", ""),
                receipt_handle=m.get("ReceiptHandle", ""),
            )
            for m in (resp or {}).get("Messages", []) or []
        ]
        if messages:
            log_stage(self.logger, "queue", "consumed", count=len(messages))
        return messages

    async def delete_message(self, receipt_handle: str) -> None:
        try:
            await self._call(self._sqs.delete_message, QueueUrl=self.queue_url, ReceiptHandle=receipt_handle)
        except _SDK_ERRORS as e:
            log_stage(self.logger, "queue", "delete_failed", level=logging.WARNING,
                      error=str(e), error_type=e.__class__.__name__)
            raise _queue_fault("sqs: failed to delete message", e) from e

__all__ = ["Message", "QueueClient"]
