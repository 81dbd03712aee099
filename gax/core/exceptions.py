"""Custom exception hierarchy."""

from __future__ import annotations

from .status import Status, StatusCode


class GaxError(Exception):
    """Base exception for all library errors."""

    pass


class ConfigurationError(GaxError):
    """Invalid policy, pagination or client configuration."""

    pass


class RpcError(GaxError):
    """A call finished with a non-OK Status.

    The Status is the last one observed for the call, after any retries.
    """

    def __init__(self, status: Status, message: str | None = None) -> None:
        super().__init__(message or str(status))
        self.status = status

    @property
    def code(self) -> StatusCode:
        return self.status.code


class PaginationError(RpcError):
    """A page could not be fetched while iterating a paginated result.

    Raised instead of ending iteration so that a failed fetch is never
    mistaken for a successful, empty terminal page.
    """

    def __init__(self, status: Status, pages_fetched: int = 0) -> None:
        super().__init__(status, f"page {pages_fetched + 1} fetch failed: {status}")
        self.pages_fetched = pages_fetched
