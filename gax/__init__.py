"""gax - runtime for generated RPC client stubs: retries and lazy pagination."""

from .config import Credentials, default_credentials
from .core import (
    CallContext,
    ConfigurationError,
    GaxError,
    PaginationError,
    RpcError,
    Status,
    StatusCode,
)
from .operations import (
    OperationsClient,
    OperationsStub,
    RetryOperationsStub,
    create_operations_stub,
)
from .pagination import PageCursor, PageResult, Pages, PaginatedResult, TokenPageRetriever
from .retry import (
    BackoffPolicy,
    ExponentialBackoffPolicy,
    LimitedDurationRetryPolicy,
    LimitedErrorCountRetryPolicy,
    RetryPolicy,
    retry_call,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "Status",
    "StatusCode",
    "CallContext",
    "Credentials",
    "default_credentials",
    # Retry
    "RetryPolicy",
    "LimitedErrorCountRetryPolicy",
    "LimitedDurationRetryPolicy",
    "BackoffPolicy",
    "ExponentialBackoffPolicy",
    "retry_call",
    # Pagination
    "PageResult",
    "PageCursor",
    "Pages",
    "PaginatedResult",
    "TokenPageRetriever",
    # Operations service
    "OperationsStub",
    "RetryOperationsStub",
    "OperationsClient",
    "create_operations_stub",
    # Exceptions
    "GaxError",
    "RpcError",
    "PaginationError",
    "ConfigurationError",
]
