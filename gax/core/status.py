"""Unified call outcome: canonical status codes and the Status value.

Architecture:
    Every stub method, retry loop and page retriever reports its outcome as a
    Status value instead of raising. Exceptions only appear at the client and
    pagination surfaces (see core.exceptions), where a final non-OK Status is
    turned into an RpcError.

Design Decisions:
    - String enum: codes serialize as their canonical names
    - Frozen dataclass: Status is a plain value, compared by code and message
    - Transport-native errors are translated in one place (Status.from_exception)
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum

import aiohttp
from pydantic import ValidationError


class StatusCode(str, Enum):
    """Canonical RPC status codes."""

    OK = "OK"
    CANCELLED = "CANCELLED"
    UNKNOWN = "UNKNOWN"
    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    RESOURCE_EXHAUSTED = "RESOURCE_EXHAUSTED"
    FAILED_PRECONDITION = "FAILED_PRECONDITION"
    ABORTED = "ABORTED"
    OUT_OF_RANGE = "OUT_OF_RANGE"
    UNIMPLEMENTED = "UNIMPLEMENTED"
    INTERNAL = "INTERNAL"
    UNAVAILABLE = "UNAVAILABLE"
    DATA_LOSS = "DATA_LOSS"

    def __str__(self) -> str:
        """String representation returns the value."""
        return self.value

    @property
    def number(self) -> int:
        """Canonical numeric value of the code."""
        return _CODE_NUMBERS[self]

    @classmethod
    def from_number(cls, number: int) -> StatusCode:
        """Get code from its numeric value. Unknown numbers map to UNKNOWN."""
        for code, value in _CODE_NUMBERS.items():
            if value == number:
                return code
        return cls.UNKNOWN

    @classmethod
    def from_http(cls, status: int) -> StatusCode:
        """Map an HTTP response status to the closest canonical code."""
        code = _HTTP_CODES.get(status)
        if code is not None:
            return code
        if 200 <= status < 300:
            return cls.OK
        if 400 <= status < 500:
            return cls.FAILED_PRECONDITION
        if 500 <= status < 600:
            return cls.INTERNAL
        return cls.UNKNOWN


_CODE_NUMBERS = {
    StatusCode.OK: 0,
    StatusCode.CANCELLED: 1,
    StatusCode.UNKNOWN: 2,
    StatusCode.INVALID_ARGUMENT: 3,
    StatusCode.DEADLINE_EXCEEDED: 4,
    StatusCode.NOT_FOUND: 5,
    StatusCode.ALREADY_EXISTS: 6,
    StatusCode.PERMISSION_DENIED: 7,
    StatusCode.RESOURCE_EXHAUSTED: 8,
    StatusCode.FAILED_PRECONDITION: 9,
    StatusCode.ABORTED: 10,
    StatusCode.OUT_OF_RANGE: 11,
    StatusCode.UNIMPLEMENTED: 12,
    StatusCode.INTERNAL: 13,
    StatusCode.UNAVAILABLE: 14,
    StatusCode.DATA_LOSS: 15,
    StatusCode.UNAUTHENTICATED: 16,
}

_HTTP_CODES = {
    400: StatusCode.INVALID_ARGUMENT,
    401: StatusCode.UNAUTHENTICATED,
    403: StatusCode.PERMISSION_DENIED,
    404: StatusCode.NOT_FOUND,
    409: StatusCode.ABORTED,
    412: StatusCode.FAILED_PRECONDITION,
    416: StatusCode.OUT_OF_RANGE,
    429: StatusCode.RESOURCE_EXHAUSTED,
    499: StatusCode.CANCELLED,
    500: StatusCode.INTERNAL,
    501: StatusCode.UNIMPLEMENTED,
    503: StatusCode.UNAVAILABLE,
    504: StatusCode.DEADLINE_EXCEEDED,
}


@dataclass(frozen=True)
class Status:
    """Outcome of a call. The default value is OK with an empty message."""

    code: StatusCode = StatusCode.OK
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.code is StatusCode.OK

    def __str__(self) -> str:
        if not self.message:
            return self.code.value
        return f"{self.code.value}: {self.message}"

    @classmethod
    def from_exception(cls, exc: BaseException) -> Status:
        """Translate a transport-native exception into a Status.

        Only exceptions listed in TRANSPORT_ERRORS are expected here; callers
        catch that tuple and let everything else (notably
        asyncio.CancelledError) propagate.

        Args:
            exc: Exception raised by the transport or by response validation

        Returns:
            Status describing the failure
        """
        if isinstance(exc, aiohttp.ClientResponseError):
            return cls(StatusCode.from_http(exc.status), exc.message or str(exc))
        if isinstance(exc, asyncio.TimeoutError):
            return cls(StatusCode.DEADLINE_EXCEEDED, str(exc) or "deadline exceeded")
        if isinstance(exc, aiohttp.ClientConnectionError):
            return cls(StatusCode.UNAVAILABLE, str(exc) or "connection failed")
        if isinstance(exc, ValidationError):
            return cls(StatusCode.INTERNAL, f"malformed response: {exc.error_count()} errors")
        return cls(StatusCode.UNKNOWN, str(exc) or type(exc).__name__)


# Exceptions a transport call may raise that are reported as a Status
TRANSPORT_ERRORS: tuple[type[BaseException], ...] = (
    aiohttp.ClientError,
    asyncio.TimeoutError,
    ValidationError,
)
