"""Per-call context: deadline, policy overrides and transport metadata.

Architecture:
    A CallContext belongs to exactly one logical call. Stubs read it to find
    the deadline and headers for each attempt, and the retrying stub asks it
    whether the caller supplied its own RetryPolicy/BackoffPolicy for this
    call. Contexts are never persisted or shared between calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import Credentials
    from ..retry.backoff import BackoffPolicy
    from ..retry.policies import RetryPolicy


@dataclass
class CallContext:
    """Mutable carrier for the settings of one call.

    Attributes:
        deadline: Absolute time after which an attempt should be abandoned
        retry_policy: Overrides the stub's default retry policy for this call
        backoff_policy: Overrides the stub's default backoff policy for this call
        credentials: Overrides the transport's ambient credentials
        metadata: Extra headers sent with each attempt
    """

    deadline: datetime | None = None
    retry_policy: RetryPolicy | None = None
    backoff_policy: BackoffPolicy | None = None
    credentials: Credentials | None = None
    metadata: dict[str, str] = field(default_factory=dict)

    def set_deadline(self, timeout: float) -> None:
        """Set the deadline to `timeout` seconds from now."""
        self.deadline = datetime.now(UTC) + timedelta(seconds=timeout)

    def time_remaining(self) -> float | None:
        """Seconds left before the deadline (never negative), or None."""
        if self.deadline is None:
            return None
        remaining = (self.deadline - datetime.now(UTC)).total_seconds()
        return max(remaining, 0.0)

    def add_metadata(self, key: str, value: str) -> None:
        self.metadata[key] = value

    def prepare_headers(self) -> dict[str, str]:
        """Build the header map for one transport attempt."""
        headers = dict(self.metadata)
        if self.credentials is not None:
            headers.update(self.credentials.authorization_header())
        return headers
