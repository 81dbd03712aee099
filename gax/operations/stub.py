"""Operations service stubs.

Architecture:
    A stub exposes one coroutine per RPC method with the uniform shape

        async def method(context, request, response) -> Status

    and stubs are stacked as decorators, each exclusively owning the stub it
    wraps:

        RetryOperationsStub -> DefaultOperationsStub -> RpcTransport

    - OperationsStub: base class; every method reports UNIMPLEMENTED
    - DefaultOperationsStub: one transport call per method, transport errors
      translated into a Status
    - RetryOperationsStub: runs each method under the retry loop with
      per-call clones of its default policies

Design Decisions:
    - Status values, not exceptions, flow between stub layers
    - Policy templates are cloned at construction and never mutated, so one
      retrying stub can serve concurrent calls
    - Further decorators (logging, metrics) wrap either layer by subclassing
      OperationsStub
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from ..config import (
    DEFAULT_BACKOFF_INITIAL_DELAY,
    DEFAULT_BACKOFF_MAXIMUM_DELAY,
    DEFAULT_BACKOFF_SCALING,
    DEFAULT_RETRY_MAXIMUM_DURATION,
    DEFAULT_RETRY_MAXIMUM_RPC_TIMEOUT,
    Credentials,
    default_credentials,
    default_endpoint,
)
from ..core.call_context import CallContext
from ..core.status import TRANSPORT_ERRORS, Status, StatusCode
from ..io.transport import HTTPTransport, RpcTransport
from ..retry.backoff import BackoffPolicy, ExponentialBackoffPolicy
from ..retry.loop import retry_call
from ..retry.policies import (
    LimitedDurationRetryPolicy,
    LimitedErrorCountRetryPolicy,
    RetryPolicy,
)
from .models import (
    CancelOperationRequest,
    DeleteOperationRequest,
    Empty,
    GetOperationRequest,
    ListOperationsRequest,
    ListOperationsResponse,
    Message,
    Operation,
    copy_message,
)


class OperationsStub:
    """Operations service interface. Unimplemented methods report UNIMPLEMENTED."""

    async def get_operation(
        self, context: CallContext, request: GetOperationRequest, response: Operation
    ) -> Status:
        return Status(StatusCode.UNIMPLEMENTED, "GetOperation not implemented")

    async def delete_operation(
        self, context: CallContext, request: DeleteOperationRequest, response: Empty
    ) -> Status:
        return Status(StatusCode.UNIMPLEMENTED, "DeleteOperation not implemented")

    async def cancel_operation(
        self, context: CallContext, request: CancelOperationRequest, response: Empty
    ) -> Status:
        return Status(StatusCode.UNIMPLEMENTED, "CancelOperation not implemented")

    async def list_operations(
        self,
        context: CallContext,
        request: ListOperationsRequest,
        response: ListOperationsResponse,
    ) -> Status:
        return Status(StatusCode.UNIMPLEMENTED, "ListOperations not implemented")

    async def close(self) -> None:
        """Release transport resources held by this stub chain."""


class DefaultOperationsStub(OperationsStub):
    """Stub performing exactly one transport call per method."""

    def __init__(self, transport: RpcTransport) -> None:
        self._transport = transport

    async def get_operation(
        self, context: CallContext, request: GetOperationRequest, response: Operation
    ) -> Status:
        return await self._invoke(context, "GET", f"v1/{request.name}", response)

    async def delete_operation(
        self, context: CallContext, request: DeleteOperationRequest, response: Empty
    ) -> Status:
        return await self._invoke(context, "DELETE", f"v1/{request.name}", response)

    async def cancel_operation(
        self, context: CallContext, request: CancelOperationRequest, response: Empty
    ) -> Status:
        return await self._invoke(context, "POST", f"v1/{request.name}:cancel", response, body={})

    async def list_operations(
        self,
        context: CallContext,
        request: ListOperationsRequest,
        response: ListOperationsResponse,
    ) -> Status:
        params = request.to_wire()
        params.pop("name", None)
        return await self._invoke(context, "GET", f"v1/{request.name}", response, params=params)

    async def close(self) -> None:
        close = getattr(self._transport, "close", None)
        if close is not None:
            await close()

    async def _invoke(
        self,
        context: CallContext,
        verb: str,
        path: str,
        response: Message,
        *,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Status:
        timeout = context.time_remaining()
        if timeout is not None and timeout <= 0:
            return Status(StatusCode.DEADLINE_EXCEEDED, "deadline expired before the call was sent")
        try:
            data = await self._transport.call(
                verb,
                path,
                body=body,
                params=params,
                headers=context.prepare_headers(),
                timeout=timeout,
            )
            copy_message(type(response).model_validate(data), response)
        except TRANSPORT_ERRORS as exc:
            return Status.from_exception(exc)
        return Status()


class RetryOperationsStub(OperationsStub):
    """Decorator retrying every method of the stub it owns.

    Args:
        stub: Inner stub; owned by this decorator from now on
        retry_policy: Default retry policy template (cloned per call)
        backoff_policy: Default backoff policy template (cloned per call)
        sleep: Awaitable used for backoff waits
    """

    def __init__(
        self,
        stub: OperationsStub,
        retry_policy: RetryPolicy | None = None,
        backoff_policy: BackoffPolicy | None = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._next_stub = stub
        # Without a template a call gets exactly one attempt
        self._default_retry_policy = (
            retry_policy.clone() if retry_policy is not None else LimitedErrorCountRetryPolicy(0)
        )
        self._default_backoff_policy = (
            backoff_policy.clone()
            if backoff_policy is not None
            else ExponentialBackoffPolicy(DEFAULT_BACKOFF_INITIAL_DELAY, DEFAULT_BACKOFF_MAXIMUM_DELAY)
        )
        self._sleep = sleep

    async def get_operation(
        self, context: CallContext, request: GetOperationRequest, response: Operation
    ) -> Status:
        return await retry_call(
            context,
            request,
            response,
            self._next_stub.get_operation,
            self._clone_retry(context),
            self._clone_backoff(context),
            method="GetOperation",
            sleep=self._sleep,
        )

    async def delete_operation(
        self, context: CallContext, request: DeleteOperationRequest, response: Empty
    ) -> Status:
        return await retry_call(
            context,
            request,
            response,
            self._next_stub.delete_operation,
            self._clone_retry(context),
            self._clone_backoff(context),
            method="DeleteOperation",
            sleep=self._sleep,
        )

    async def cancel_operation(
        self, context: CallContext, request: CancelOperationRequest, response: Empty
    ) -> Status:
        return await retry_call(
            context,
            request,
            response,
            self._next_stub.cancel_operation,
            self._clone_retry(context),
            self._clone_backoff(context),
            method="CancelOperation",
            sleep=self._sleep,
        )

    async def list_operations(
        self,
        context: CallContext,
        request: ListOperationsRequest,
        response: ListOperationsResponse,
    ) -> Status:
        return await retry_call(
            context,
            request,
            response,
            self._next_stub.list_operations,
            self._clone_retry(context),
            self._clone_backoff(context),
            method="ListOperations",
            sleep=self._sleep,
        )

    async def close(self) -> None:
        await self._next_stub.close()

    def _clone_retry(self, context: CallContext) -> RetryPolicy:
        if context.retry_policy is not None:
            return context.retry_policy
        return self._default_retry_policy.clone()

    def _clone_backoff(self, context: CallContext) -> BackoffPolicy:
        if context.backoff_policy is not None:
            return context.backoff_policy
        return self._default_backoff_policy.clone()


def create_operations_stub(
    credentials: Credentials | None = None,
    *,
    endpoint: str | None = None,
    transport: RpcTransport | None = None,
) -> OperationsStub:
    """Build the default stub chain: retries over a single-call HTTP stub.

    Args:
        credentials: Explicit credentials; ambient credentials are used when omitted
        endpoint: Service endpoint; defaults to the configured endpoint
        transport: Pre-built transport (credentials and endpoint are then ignored)

    Returns:
        A RetryOperationsStub wrapping a DefaultOperationsStub
    """
    if transport is None:
        transport = HTTPTransport(
            endpoint or default_endpoint(),
            credentials if credentials is not None else default_credentials(),
        )
    retry_policy = LimitedDurationRetryPolicy(
        DEFAULT_RETRY_MAXIMUM_DURATION, DEFAULT_RETRY_MAXIMUM_RPC_TIMEOUT
    )
    backoff_policy = ExponentialBackoffPolicy(
        DEFAULT_BACKOFF_INITIAL_DELAY, DEFAULT_BACKOFF_MAXIMUM_DELAY, DEFAULT_BACKOFF_SCALING
    )
    return RetryOperationsStub(DefaultOperationsStub(transport), retry_policy, backoff_policy)
