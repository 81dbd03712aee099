"""Lazy pagination over list results.

Architecture:
    This package turns a PageRetriever (one RPC per page) into lazy,
    restartable sequences:
    - PageResult: one fetched page
    - Pages / PageCursor: page-level traversal with an optional page cap
    - PaginatedResult: element-level traversal across pages
    - TokenPageRetriever: adapter for token-driven list methods
"""

from .page import Accessor, PageResult, PageRetriever, as_accessor
from .pages import CursorState, PageCursor, Pages
from .paginated import PaginatedResult
from .retrievers import PageCall, TokenPageRetriever

__all__ = [
    "Accessor",
    "PageRetriever",
    "PageResult",
    "as_accessor",
    "CursorState",
    "PageCursor",
    "Pages",
    "PaginatedResult",
    "PageCall",
    "TokenPageRetriever",
]
