"""Unit tests for TokenPageRetriever."""

from __future__ import annotations

import pytest

from gax.core import Status, StatusCode
from gax.operations import ListOperationsResponse, Operation
from gax.pagination import PaginatedResult, TokenPageRetriever

# token -> (operation names, next token); the last page has elements and no token
SERVER_PAGES = {
    "": (["a", "b"], "t1"),
    "t1": (["c"], "t2"),
    "t2": (["d", "e"], ""),
}


class FakeServer:
    def __init__(self, pages=SERVER_PAGES) -> None:
        self.pages = pages
        self.requested: list[str] = []

    async def __call__(self, token: str, page: ListOperationsResponse) -> Status:
        self.requested.append(token)
        names, next_token = self.pages[token]
        page.operations.extend(Operation(name=name) for name in names)
        page.next_page_token = next_token
        return Status()


class TestTokenPageRetriever:
    """Test token bookkeeping and the pending final page."""

    @pytest.mark.asyncio
    async def test_tokens_are_forwarded(self):
        """Each call requests the token returned by the previous page."""
        server = FakeServer()
        retriever = TokenPageRetriever(server, "operations")

        await retriever(ListOperationsResponse())
        assert retriever.page_token == "t1"
        await retriever(ListOperationsResponse())

        assert server.requested == ["", "t1"]
        assert retriever.page_token == "t2"

    @pytest.mark.asyncio
    async def test_final_page_with_elements(self):
        """The last server page keeps its empty token and an empty terminal page follows."""
        server = FakeServer()
        retriever = TokenPageRetriever(server, "operations", page_token="t2")

        last = ListOperationsResponse()
        assert (await retriever(last)).ok
        assert last.next_page_token == ""
        assert [op.name for op in last.operations] == ["d", "e"]
        assert retriever.has_pending_page

        terminal = ListOperationsResponse()
        assert (await retriever(terminal)).ok
        assert terminal.next_page_token == ""
        assert terminal.operations == []
        assert not retriever.has_pending_page
        assert server.requested == ["t2"]

    @pytest.mark.asyncio
    async def test_empty_final_page_is_terminal(self):
        """A final page without elements leaves nothing pending."""
        server = FakeServer({"": ([], "")})
        retriever = TokenPageRetriever(server, "operations")

        page = ListOperationsResponse()
        await retriever(page)

        assert page.next_page_token == ""
        assert not retriever.has_pending_page

    @pytest.mark.asyncio
    async def test_failure_does_not_advance(self):
        """A failed call is returned as-is and the token is kept."""
        failure = Status(StatusCode.UNAVAILABLE, "down")

        async def call(token: str, page: ListOperationsResponse) -> Status:
            return failure

        retriever = TokenPageRetriever(call, "operations", page_token="t1")

        assert await retriever(ListOperationsResponse()) == failure
        assert retriever.page_token == "t1"

    @pytest.mark.asyncio
    async def test_paginated_result_surfaces_all_elements(self):
        """All server elements are yielded, on every traversal."""
        server = FakeServer()
        result = PaginatedResult(
            TokenPageRetriever(server, "operations"), ListOperationsResponse, "operations"
        )

        names1 = [op.name async for op in result]
        names2 = [op.name async for op in result]

        assert names1 == ["a", "b", "c", "d", "e"]
        assert names2 == names1
        assert server.requested == ["", "t1", "t2", "", "t1", "t2"]
