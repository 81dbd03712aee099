"""High-level Operations client."""

from __future__ import annotations

from collections.abc import Callable

from ..core.call_context import CallContext
from ..core.exceptions import RpcError
from ..core.status import Status
from ..pagination import PaginatedResult, TokenPageRetriever
from .models import (
    CancelOperationRequest,
    DeleteOperationRequest,
    Empty,
    GetOperationRequest,
    ListOperationsRequest,
    ListOperationsResponse,
    Operation,
)
from .stub import OperationsStub, create_operations_stub


class OperationsClient:
    """Convenience surface over an OperationsStub.

    Unary methods return the response message and raise RpcError carrying
    the final Status when the call fails. list_operations() returns a lazy
    PaginatedResult that performs one stub call per page.

    Args:
        stub: Stub chain to call; defaults to create_operations_stub()
        context_factory: Builds the CallContext for each call and each page
    """

    def __init__(
        self,
        stub: OperationsStub | None = None,
        *,
        context_factory: Callable[[], CallContext] = CallContext,
    ) -> None:
        self._stub = stub if stub is not None else create_operations_stub()
        self._context_factory = context_factory

    @property
    def stub(self) -> OperationsStub:
        return self._stub

    async def get_operation(self, name: str, *, context: CallContext | None = None) -> Operation:
        response = Operation()
        status = await self._stub.get_operation(
            context or self._context_factory(), GetOperationRequest(name=name), response
        )
        _raise_for_status(status)
        return response

    async def delete_operation(self, name: str, *, context: CallContext | None = None) -> None:
        status = await self._stub.delete_operation(
            context or self._context_factory(), DeleteOperationRequest(name=name), Empty()
        )
        _raise_for_status(status)

    async def cancel_operation(self, name: str, *, context: CallContext | None = None) -> None:
        status = await self._stub.cancel_operation(
            context or self._context_factory(), CancelOperationRequest(name=name), Empty()
        )
        _raise_for_status(status)

    def list_operations(
        self,
        name: str = "operations",
        filter: str = "",
        *,
        page_size: int = 0,
        page_cap: int = 0,
        page_token: str = "",
    ) -> PaginatedResult[Operation, ListOperationsResponse]:
        """List operations matching `filter`, lazily, one RPC per page.

        Args:
            name: Collection to list
            filter: Server-side filter expression
            page_size: Requested page size (0 lets the server decide)
            page_cap: Maximum number of pages per traversal (0 = unlimited)
            page_token: Token to resume listing from

        Returns:
            PaginatedResult yielding Operation messages; iterating it raises
            PaginationError if a page cannot be fetched
        """

        async def fetch(token: str, page: ListOperationsResponse) -> Status:
            request = ListOperationsRequest(
                name=name, filter=filter, page_size=page_size, page_token=token
            )
            return await self._stub.list_operations(self._context_factory(), request, page)

        retriever = TokenPageRetriever(fetch, "operations", page_token)
        return PaginatedResult(retriever, ListOperationsResponse, "operations", page_cap)

    async def close(self) -> None:
        await self._stub.close()

    async def __aenter__(self) -> OperationsClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()


def _raise_for_status(status: Status) -> None:
    if not status.ok:
        raise RpcError(status)
