"""Transport used by base stubs to perform a single RPC attempt.

The transport only moves JSON; it raises the native aiohttp/asyncio errors
and leaves their translation into a Status to the stub (see
Status.from_exception).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from ..config import DEFAULT_TIMEOUT, Credentials
from .http_client import HTTPClient


@runtime_checkable
class RpcTransport(Protocol):
    """Performs one request and returns the decoded JSON response."""

    async def call(
        self,
        verb: str,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]: ...


class HTTPTransport:
    """JSON-over-HTTP transport bound to one service endpoint.

    Args:
        endpoint: Base URL of the service
        credentials: Ambient credentials, used unless the call sends its own
        timeout: Default per-request timeout in seconds
        http: HTTP client to use (one is created when omitted)
    """

    def __init__(
        self,
        endpoint: str,
        credentials: Credentials | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        http: HTTPClient | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._credentials = credentials
        self._http = http or HTTPClient(base_url=endpoint, timeout=timeout)

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def call(
        self,
        verb: str,
        path: str,
        *,
        body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> dict[str, Any]:
        request_headers: dict[str, str] = {}
        if self._credentials is not None:
            request_headers.update(self._credentials.authorization_header())
        request_headers.update(headers or {})
        return await self._http.request(
            verb.upper(),
            path,
            params=params,
            json=body,
            headers=request_headers,
            timeout=timeout,
        )

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self) -> HTTPTransport:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
