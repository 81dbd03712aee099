"""Page retriever for request/response list methods driven by page tokens."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Generic

from ..core.status import Status
from .page import Accessor, RawPageT, as_accessor

PageCall = Callable[[str, RawPageT], Awaitable[Status]]


class TokenPageRetriever(Generic[RawPageT]):
    """Adapts "fetch the page for this token" calls to the PageRetriever contract.

    Servers usually put elements on their last page and give it an empty
    token. The pagination engine treats an empty token as the terminal page,
    whose elements are not surfaced. When the last server page holds
    elements, has_pending_page stays true after that fetch, so the cursor
    keeps it as a regular page. The following fetch returns an empty terminal
    page without calling the server again. Pages are never rewritten: every
    token a caller sees came from the server.

    The token is kept in plain attributes; the copy.copy snapshot taken by
    Pages.begin() therefore restarts every traversal at `page_token`.

    Args:
        call: Fills the container with the page for the given token
        accessor: Extracts the element collection (or its field name)
        page_token: Token of the first page to fetch ("" for the beginning)
    """

    def __init__(
        self,
        call: PageCall[RawPageT],
        accessor: str | Accessor[RawPageT, Any],
        page_token: str = "",
    ) -> None:
        self._call = call
        self._accessor = as_accessor(accessor)
        self._page_token = page_token
        self._exhausted = False
        self._pending_page = False

    @property
    def page_token(self) -> str:
        """Token of the next page this retriever will request."""
        return self._page_token

    @property
    def has_pending_page(self) -> bool:
        """True while an empty terminal page is still owed after the server's last page."""
        return self._pending_page

    async def __call__(self, page: RawPageT) -> Status:
        if self._exhausted:
            self._pending_page = False
            return Status()

        status = await self._call(self._page_token, page)
        if not status.ok:
            return status

        token = getattr(page, "next_page_token", "")
        if token:
            self._page_token = token
            return status

        self._exhausted = True
        self._pending_page = bool(self._accessor(page))
        return status
