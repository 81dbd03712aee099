"""Retry loop driving repeated invocation of one operation.

The loop is the whole retry algorithm:

1. invoke the operation; an OK status is returned at once
2. otherwise ask the retry policy; if it declines, that status is final
3. otherwise wait for the backoff policy's next delay and go back to 1

The status returned is always the last one observed, never a synthesized one.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..core.call_context import CallContext
from ..core.status import Status
from .backoff import BackoffPolicy
from .policies import RetryPolicy
from .telemetry import log_retry_exhausted, log_retry_scheduled

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")

Invoke = Callable[[CallContext, RequestT, ResponseT], Awaitable[Status]]


async def retry_call(
    context: CallContext,
    request: RequestT,
    response: ResponseT,
    invoke: Invoke[RequestT, ResponseT],
    retry_policy: RetryPolicy,
    backoff_policy: BackoffPolicy,
    *,
    method: str = "",
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> Status:
    """Invoke `invoke` until it succeeds or `retry_policy` gives up.

    The policies are consumed by this call; pass fresh clones.

    Args:
        context: Context of the logical call, reused for every attempt
        request: Request message
        response: Response container filled by a successful attempt
        invoke: Operation performing one attempt
        retry_policy: Per-call retry policy
        backoff_policy: Per-call backoff policy
        method: Method name used in log records
        sleep: Awaitable used to wait between attempts

    Returns:
        The status of the last attempt
    """
    caller_deadline = context.deadline
    attempt = 0
    try:
        while True:
            attempt += 1
            # Every attempt gets its own deadline within the caller's
            context.deadline = caller_deadline
            retry_policy.setup(context)
            status = await invoke(context, request, response)
            if status.ok:
                return status
            if not retry_policy.on_failure(status):
                log_retry_exhausted(
                    method=method,
                    attempt=attempt,
                    status=status,
                    permanent=retry_policy.is_permanent_failure(status),
                )
                return status
            delay = backoff_policy.next_delay()
            log_retry_scheduled(method=method, attempt=attempt, status=status, delay=delay)
            await sleep(delay)
    finally:
        context.deadline = caller_deadline
