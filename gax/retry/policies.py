"""Retry policies: decide whether a failed attempt may be retried.

Architecture:
    A RetryPolicy carries mutable per-call state (failure counter, budget
    start time). Stubs keep one policy as a read-only template and give every
    call its own clone(), so concurrent calls never share a budget.

Design Decisions:
    - Abstract base class: variants share the retryable-code handling
    - clone() builds a fresh instance from the configuration only; the
      accumulated state of the template is never copied
    - Only transient codes are retried by default
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta

from ..core.call_context import CallContext
from ..core.exceptions import ConfigurationError
from ..core.status import Status, StatusCode

DEFAULT_RETRYABLE_CODES = frozenset({StatusCode.UNAVAILABLE, StatusCode.DEADLINE_EXCEEDED})


class RetryPolicy(ABC):
    """Decides, per failed attempt, whether the retry budget permits another one."""

    def __init__(self, retryable_codes: Iterable[StatusCode] | None = None) -> None:
        self._retryable_codes = frozenset(
            DEFAULT_RETRYABLE_CODES if retryable_codes is None else retryable_codes
        )

    @property
    def retryable_codes(self) -> frozenset[StatusCode]:
        return self._retryable_codes

    def is_permanent_failure(self, status: Status) -> bool:
        """True if retrying cannot change the outcome for this status."""
        return status.code not in self._retryable_codes

    def setup(self, context: CallContext) -> None:
        """Prepare the context before each attempt. Default: nothing."""

    @abstractmethod
    def on_failure(self, status: Status) -> bool:
        """Record a failed attempt.

        Args:
            status: Status of the attempt that just failed

        Returns:
            True if the caller should try again
        """

    @abstractmethod
    def is_exhausted(self) -> bool:
        """True once the budget does not allow any further attempt."""

    @abstractmethod
    def clone(self) -> RetryPolicy:
        """Return a new policy with the same configuration and a fresh budget."""


class LimitedErrorCountRetryPolicy(RetryPolicy):
    """Retry up to `maximum_failures` times, i.e. at most N+1 attempts.

    A policy with `maximum_failures=0` allows a single attempt.
    """

    def __init__(
        self,
        maximum_failures: int,
        retryable_codes: Iterable[StatusCode] | None = None,
    ) -> None:
        if maximum_failures < 0:
            raise ConfigurationError("maximum_failures must be >= 0")
        super().__init__(retryable_codes)
        self._maximum_failures = maximum_failures
        self._failures = 0

    @property
    def maximum_failures(self) -> int:
        return self._maximum_failures

    @property
    def failures(self) -> int:
        return self._failures

    def on_failure(self, status: Status) -> bool:
        if self.is_permanent_failure(status):
            return False
        self._failures += 1
        return self._failures <= self._maximum_failures

    def is_exhausted(self) -> bool:
        return self._failures > self._maximum_failures

    def clone(self) -> LimitedErrorCountRetryPolicy:
        return LimitedErrorCountRetryPolicy(self._maximum_failures, self._retryable_codes)


class LimitedDurationRetryPolicy(RetryPolicy):
    """Retry until `maximum_duration` seconds have elapsed since the policy was created.

    Each attempt's deadline is also bounded by the remaining budget and, if
    given, by `maximum_rpc_timeout`.
    """

    def __init__(
        self,
        maximum_duration: float,
        maximum_rpc_timeout: float | None = None,
        retryable_codes: Iterable[StatusCode] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if maximum_duration <= 0:
            raise ConfigurationError("maximum_duration must be > 0")
        if maximum_rpc_timeout is not None and maximum_rpc_timeout <= 0:
            raise ConfigurationError("maximum_rpc_timeout must be > 0")
        super().__init__(retryable_codes)
        self._maximum_duration = maximum_duration
        self._maximum_rpc_timeout = maximum_rpc_timeout
        self._clock = clock
        self._started = clock()

    @property
    def maximum_duration(self) -> float:
        return self._maximum_duration

    def remaining(self) -> float:
        return max(self._maximum_duration - (self._clock() - self._started), 0.0)

    def setup(self, context: CallContext) -> None:
        timeout = self.remaining()
        if self._maximum_rpc_timeout is not None:
            timeout = min(timeout, self._maximum_rpc_timeout)
        deadline = datetime.now(UTC) + timedelta(seconds=timeout)
        if context.deadline is None or deadline < context.deadline:
            context.deadline = deadline

    def on_failure(self, status: Status) -> bool:
        if self.is_permanent_failure(status):
            return False
        return not self.is_exhausted()

    def is_exhausted(self) -> bool:
        return self._clock() - self._started >= self._maximum_duration

    def clone(self) -> LimitedDurationRetryPolicy:
        return LimitedDurationRetryPolicy(
            self._maximum_duration,
            self._maximum_rpc_timeout,
            self._retryable_codes,
            self._clock,
        )
