"""Core components."""

from .call_context import CallContext
from .exceptions import ConfigurationError, GaxError, PaginationError, RpcError
from .status import TRANSPORT_ERRORS, Status, StatusCode

__all__ = [
    "CallContext",
    "Status",
    "StatusCode",
    "TRANSPORT_ERRORS",
    "GaxError",
    "RpcError",
    "PaginationError",
    "ConfigurationError",
]
