"""Element-level view over a paginated list result."""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from typing import Generic

from .page import Accessor, ElementT, PageRetriever, RawPageT
from .pages import Pages


class PaginatedResult(Generic[ElementT, RawPageT]):
    """Lazy sequence of elements flattened across pages.

    Drives an internal Pages sequence with the same retriever and cap and
    yields the elements of every page it visits, in page-major order. The
    page that ends a capped traversal is fetched but its elements are not
    yielded; use pages() to work with page boundaries directly.
    """

    def __init__(
        self,
        retriever: PageRetriever[RawPageT],
        page_factory: Callable[[], RawPageT],
        accessor: str | Accessor[RawPageT, ElementT],
        page_cap: int = 0,
    ) -> None:
        self._pages: Pages[ElementT, RawPageT] = Pages(
            retriever, page_factory, accessor, page_cap
        )

    def pages(self) -> Pages[ElementT, RawPageT]:
        return self._pages

    async def __aiter__(self) -> AsyncIterator[ElementT]:
        async for page in self._pages:
            for element in page:
                yield element

    async def collect(self) -> list[ElementT]:
        """Fetch every page and return all elements as a list."""
        return [element async for element in self]
