"""Long-running Operations service: messages, stubs and client."""

from .client import OperationsClient
from .models import (
    CancelOperationRequest,
    DeleteOperationRequest,
    Empty,
    GetOperationRequest,
    ListOperationsRequest,
    ListOperationsResponse,
    Message,
    Operation,
    OperationError,
    copy_message,
)
from .stub import (
    DefaultOperationsStub,
    OperationsStub,
    RetryOperationsStub,
    create_operations_stub,
)

__all__ = [
    "OperationsClient",
    "OperationsStub",
    "DefaultOperationsStub",
    "RetryOperationsStub",
    "create_operations_stub",
    "Message",
    "copy_message",
    "Operation",
    "OperationError",
    "GetOperationRequest",
    "DeleteOperationRequest",
    "CancelOperationRequest",
    "ListOperationsRequest",
    "ListOperationsResponse",
    "Empty",
]
