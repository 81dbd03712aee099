"""Shared runtime defaults and ambient credentials.

This module centralizes the endpoint, the default retry/backoff parameters
installed by the stub factories, and the environment variables consulted for
ambient configuration, so the stub and client modules stay small and focused.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

# Environment variables
ENDPOINT_ENV = "GAX_ENDPOINT"
ACCESS_TOKEN_ENV = "GAX_ACCESS_TOKEN"

DEFAULT_ENDPOINT = "https://longrunning.googleapis.com"

# Transport
DEFAULT_TIMEOUT = 30.0  # seconds, per HTTP request when the context has no deadline

# Default policies installed by create_operations_stub().
# Retry budget: total seconds across all attempts, and per-attempt timeout
DEFAULT_RETRY_MAXIMUM_DURATION = 0.5
DEFAULT_RETRY_MAXIMUM_RPC_TIMEOUT = 0.5
# Exponential backoff: first delay, ceiling and growth factor (seconds)
DEFAULT_BACKOFF_INITIAL_DELAY = 0.02
DEFAULT_BACKOFF_MAXIMUM_DELAY = 0.1
DEFAULT_BACKOFF_SCALING = 2.0


@dataclass(frozen=True)
class Credentials:
    """Bearer token credentials attached to outgoing calls."""

    token: str

    def __repr__(self) -> str:
        # keep tokens out of logs
        return "Credentials(token=***)"

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def default_credentials() -> Credentials | None:
    """Ambient credentials from the environment, if any."""
    token = os.environ.get(ACCESS_TOKEN_ENV)
    if not token:
        return None
    return Credentials(token=token)


def default_endpoint() -> str:
    """Service endpoint, honouring the environment override."""
    return os.environ.get(ENDPOINT_ENV) or DEFAULT_ENDPOINT
