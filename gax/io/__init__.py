"""I/O layer (HTTP client and RPC transport)."""

from .http_client import HTTPClient
from .transport import HTTPTransport, RpcTransport

__all__ = [
    "HTTPClient",
    "HTTPTransport",
    "RpcTransport",
]
