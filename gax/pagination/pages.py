"""Lazy sequence of pages.

Architecture:
    Pages holds the configuration of a list call (retriever, page container
    factory, accessor, page cap). Each traversal is driven by its own
    PageCursor, which walks the states

        FETCHING -> HAS_PAGE -> FETCHING -> ... -> EXHAUSTED

    fetching a page only when it is first looked at. A cursor is at the end
    once the fetched page has an empty continuation token (unless the
    retriever reports has_pending_page), or once the page cap (0 = unlimited)
    has been reached. The page that ends a capped traversal is still fetched
    and stays readable through the cursor, but `async for` loops never yield
    it.

Design Decisions:
    - Pull-based: no page is fetched before the caller asks for it
    - Restartable: begin() snapshots the retriever with copy.copy, so any
      cursor state a retriever keeps in its own attributes starts over on
      every traversal (see PageRetriever for what a shallow copy cannot reset)
    - Fetch failures raise PaginationError; they never look like exhaustion
"""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator, Callable
from enum import Enum
from time import perf_counter
from typing import Generic

from ..core.exceptions import ConfigurationError, PaginationError
from ..core.status import Status
from .page import Accessor, ElementT, PageResult, PageRetriever, RawPageT, as_accessor
from .telemetry import log_page_fetch_failed, log_page_fetched


class CursorState(str, Enum):
    """Position of a PageCursor in its traversal."""

    FETCHING = "fetching"
    HAS_PAGE = "has_page"
    EXHAUSTED = "exhausted"
    FAILED = "failed"


class PageCursor(Generic[ElementT, RawPageT]):
    """Position within one traversal of a Pages sequence."""

    def __init__(
        self,
        retriever: PageRetriever[RawPageT],
        page_factory: Callable[[], RawPageT],
        accessor: Accessor[RawPageT, ElementT],
        page_cap: int,
        *,
        state: CursorState = CursorState.FETCHING,
        page: PageResult[ElementT, RawPageT] | None = None,
    ) -> None:
        self._retriever = retriever
        self._page_factory = page_factory
        self._accessor = accessor
        self._page_cap = page_cap
        self._state = state
        self._page = page
        self._pages_fetched = 0
        self._status = Status()

    @property
    def state(self) -> CursorState:
        return self._state

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    @property
    def status(self) -> Status:
        """Status of the most recent fetch (OK until a fetch fails)."""
        return self._status

    async def page(self) -> PageResult[ElementT, RawPageT]:
        """The page at this position, fetching it if necessary.

        Raises:
            PaginationError: If the page could not be fetched
        """
        return await self._ensure_fetched()

    async def at_end(self) -> bool:
        """True if this position is the end of the sequence.

        Raises:
            PaginationError: If the page could not be fetched
        """
        await self._ensure_fetched()
        return self._state is CursorState.EXHAUSTED

    async def advance(self) -> None:
        """Move to the next page. Advancing an exhausted cursor does nothing.

        Raises:
            PaginationError: If the current page could not be fetched
        """
        await self._ensure_fetched()
        if self._state is CursorState.HAS_PAGE:
            self._state = CursorState.FETCHING

    async def _ensure_fetched(self) -> PageResult[ElementT, RawPageT]:
        if self._state is CursorState.FAILED:
            raise PaginationError(self._status, self._pages_fetched)
        if self._state is not CursorState.FETCHING:
            if self._page is None:
                raise RuntimeError(f"cursor in state {self._state.value} has no page")
            return self._page

        raw_page = self._page_factory()
        started = perf_counter()
        status = await self._retriever(raw_page)
        self._status = status
        if not status.ok:
            self._state = CursorState.FAILED
            self._page = None
            log_page_fetch_failed(page_number=self._pages_fetched + 1, status=status)
            raise PaginationError(status, self._pages_fetched)

        self._pages_fetched += 1
        page = PageResult(raw_page, self._accessor)
        self._page = page
        token = page.next_page_token
        more = bool(token) or getattr(self._retriever, "has_pending_page", False) is True
        capped = self._page_cap > 0 and self._pages_fetched >= self._page_cap
        self._state = CursorState.HAS_PAGE if more and not capped else CursorState.EXHAUSTED
        log_page_fetched(
            page_number=self._pages_fetched,
            items=len(page),
            next_page_token=token,
            terminal=self._state is CursorState.EXHAUSTED,
            latency_ms=(perf_counter() - started) * 1000.0,
        )
        return page


class Pages(Generic[ElementT, RawPageT]):
    """Lazy, restartable sequence of PageResult objects.

    Args:
        retriever: Fetches one page into a fresh container per call
        page_factory: Builds an empty raw page container
        accessor: Extracts the element collection from a raw page (or its field name)
        page_cap: Maximum number of pages to fetch per traversal; 0 means unlimited

    Example:
        async for page in Pages(retriever, ListOperationsResponse, "operations"):
            print(page.next_page_token, len(page))
    """

    def __init__(
        self,
        retriever: PageRetriever[RawPageT],
        page_factory: Callable[[], RawPageT],
        accessor: str | Accessor[RawPageT, ElementT],
        page_cap: int = 0,
    ) -> None:
        if page_cap < 0:
            raise ConfigurationError("page_cap must be >= 0 (0 means unlimited)")
        self._retriever = retriever
        self._page_factory = page_factory
        self._accessor = as_accessor(accessor)
        self._page_cap = page_cap

    @property
    def page_cap(self) -> int:
        return self._page_cap

    def begin(self) -> PageCursor[ElementT, RawPageT]:
        """Start a new traversal from the first page. Nothing is fetched yet."""
        return PageCursor(
            copy.copy(self._retriever),
            self._page_factory,
            self._accessor,
            self._page_cap,
        )

    def end(self) -> PageCursor[ElementT, RawPageT]:
        """Terminal position; its page is an empty container with an empty token."""
        return PageCursor(
            self._retriever,
            self._page_factory,
            self._accessor,
            self._page_cap,
            state=CursorState.EXHAUSTED,
            page=PageResult(self._page_factory(), self._accessor),
        )

    async def __aiter__(self) -> AsyncIterator[PageResult[ElementT, RawPageT]]:
        cursor = self.begin()
        while not await cursor.at_end():
            yield await cursor.page()
            await cursor.advance()
