"""Structured logging for page fetches."""

from __future__ import annotations

import logging

from ..core.status import Status

logger = logging.getLogger(__name__)


def log_page_fetched(
    *,
    page_number: int,
    items: int,
    next_page_token: str,
    terminal: bool,
    latency_ms: float | None = None,
) -> None:
    """Log a successfully fetched page.

    Args:
        page_number: One-based index of the page within the traversal
        items: Number of elements on the page
        next_page_token: Continuation token reported by the page
        terminal: Whether the page ends the traversal (empty token or cap reached)
        latency_ms: Fetch latency in milliseconds (optional)
    """
    logger.debug(
        "page_fetched",
        extra={
            "page_number": page_number,
            "items": items,
            "next_page_token": next_page_token,
            "terminal": terminal,
            "latency_ms": latency_ms,
        },
    )


def log_page_fetch_failed(*, page_number: int, status: Status) -> None:
    """Log a page fetch that returned a non-OK status."""
    logger.error(
        "page_fetch_failed",
        extra={
            "page_number": page_number,
            "status_code": status.code.value,
            "status_message": status.message,
        },
    )
