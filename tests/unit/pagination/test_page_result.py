"""Unit tests for PageResult."""

from __future__ import annotations

from gax.operations import ListOperationsResponse, Operation
from gax.pagination import PageResult


def make_page_result() -> PageResult[Operation, ListOperationsResponse]:
    response = ListOperationsResponse(
        next_page_token="NextPage",
        operations=[Operation(name=f"TestOperation{i}") for i in range(10)],
    )
    return PageResult(response, "operations")


class TestPageResult:
    """Test PageResult accessors and iteration."""

    def test_raw_page(self):
        """Token and elements come from the wrapped raw page."""
        page_result = make_page_result()

        assert page_result.next_page_token == "NextPage"
        assert page_result.next_page_token == page_result.raw_page.next_page_token
        assert len(page_result.raw_page.operations) == 10

    def test_accessors(self):
        """Indexing and iteration expose the extracted elements."""
        page_result = make_page_result()

        assert page_result[0].name == "TestOperation0"
        assert next(iter(page_result)).name == "TestOperation0"
        assert len(page_result) == 10

    def test_callable_accessor(self):
        """A callable accessor works like a field name."""
        response = ListOperationsResponse(operations=[Operation(name="op")])
        page_result = PageResult(response, lambda page: page.operations)

        assert [op.name for op in page_result] == ["op"]

    def test_basic_iteration(self):
        """Iteration visits the raw page's elements in order."""
        page_result = make_page_result()

        assert list(page_result) == page_result.raw_page.operations

    def test_items_is_not_a_copy(self):
        """items returns the raw page's own collection."""
        page_result = make_page_result()

        assert page_result.items is page_result.raw_page.operations

    def test_drain_moves_elements_out(self):
        """drain() returns the elements and leaves the page empty."""
        page_result = make_page_result()

        ops = page_result.drain()

        assert [op.name for op in ops] == [f"TestOperation{i}" for i in range(10)]
        assert len(page_result) == 0
        assert page_result.raw_page.operations == []
        # The token is not part of the element collection
        assert page_result.next_page_token == "NextPage"

    def test_missing_token_reads_as_empty(self):
        """A raw page without a token is terminal."""
        page_result = PageResult(ListOperationsResponse(), "operations")

        assert page_result.next_page_token == ""
