"""Shared fixtures for pagination tests."""

from __future__ import annotations

import pytest

from gax.core import Status, StatusCode
from gax.operations import ListOperationsResponse, Operation


class FakePageRetriever:
    """Produces pages "NextPage1".."NextPage{max_pages}", then an empty terminal page.

    Each page holds `elts_per_page` operations named "Element {page}x{index}".
    With `fail_after_page` set, the fetch following that many pages fails.
    """

    def __init__(self, max_pages: int, elts_per_page: int, fail_after_page: int = 0) -> None:
        self.i = 1
        self.max_pages = max_pages
        self.elts_per_page = elts_per_page
        self.fail_after_page = fail_after_page

    async def __call__(self, page: ListOperationsResponse) -> Status:
        if self.fail_after_page and self.i > self.fail_after_page:
            return Status(StatusCode.UNAVAILABLE, "backend went away")
        if self.i <= self.max_pages:
            page.next_page_token = f"NextPage{self.i}"
            for j in range(self.elts_per_page):
                page.operations.append(Operation(name=f"Element {self.i}x{j}"))
            self.i += 1
        return Status()


def make_expected_names(pages: int, elts: int) -> list[str]:
    return [f"Element {i}x{j}" for i in range(1, pages + 1) for j in range(elts)]


@pytest.fixture
def retriever_cls() -> type[FakePageRetriever]:
    return FakePageRetriever


@pytest.fixture
def expected_names():
    return make_expected_names
