"""Single fetched pages and the capabilities the pagination engine is built on.

Architecture:
    The engine never looks inside a raw page except through two injected
    capabilities:
    - PageRetriever: fills a fresh raw page container and reports a Status
    - Accessor: returns the element collection of a raw page
    The continuation token is read from the raw page's `next_page_token`
    attribute; an empty token marks the terminal page.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Iterator, MutableSequence
from typing import Any, Generic, Protocol, TypeVar

from ..core.status import Status

ElementT = TypeVar("ElementT")
RawPageT = TypeVar("RawPageT")
RawPageT_contra = TypeVar("RawPageT_contra", contravariant=True)

Accessor = Callable[[RawPageT], MutableSequence[ElementT]]


class PageRetriever(Protocol[RawPageT_contra]):
    """Fetches one page of a list result into a caller-provided container.

    On OK the container holds either elements and a non-empty
    `next_page_token`, or no elements and an empty token (exhausted).
    Any other Status is a fetch failure.

    A retriever whose last page holds elements under an empty token may
    expose a true `has_pending_page` attribute after that fetch. The page
    then counts as a regular page, and the retriever must answer the next
    fetch with an empty terminal page.

    Pages.begin() restarts a traversal with a shallow copy.copy() of the
    retriever. Keep per-traversal position (page token, counters) in plain
    immutable attributes of the retriever itself. Position held in a closure
    (`nonlocal`) or in a nested mutable object is shared between copies and
    is not reset when a new traversal begins.
    """

    async def __call__(self, page: RawPageT_contra) -> Status: ...


def as_accessor(accessor: str | Accessor[Any, Any]) -> Accessor[Any, Any]:
    """Accept either an accessor callable or the name of the collection field."""
    if isinstance(accessor, str):
        return operator.attrgetter(accessor)
    return accessor


class PageResult(Generic[ElementT, RawPageT]):
    """One fetched page: its elements and continuation token.

    A PageResult owns its raw page. drain() moves the elements out and leaves
    the page's collection empty, so a page is a single-use snapshot; copy the
    elements first if they are needed afterwards.
    """

    def __init__(self, raw_page: RawPageT, accessor: str | Accessor[RawPageT, ElementT]) -> None:
        self._raw_page = raw_page
        self._accessor = as_accessor(accessor)

    @property
    def raw_page(self) -> RawPageT:
        return self._raw_page

    @property
    def next_page_token(self) -> str:
        return getattr(self._raw_page, "next_page_token", "") or ""

    @property
    def items(self) -> MutableSequence[ElementT]:
        """The page's element collection (not a copy)."""
        return self._accessor(self._raw_page)

    def drain(self) -> list[ElementT]:
        """Move all elements out of the page, leaving its collection empty."""
        items = self.items
        moved = list(items)
        items.clear()
        return moved

    def __iter__(self) -> Iterator[ElementT]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> ElementT:
        return self.items[index]

    def __repr__(self) -> str:
        return f"PageResult(items={len(self)}, next_page_token={self.next_page_token!r})"
