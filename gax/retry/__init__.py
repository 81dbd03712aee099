"""Retry and backoff policies and the retry loop."""

from .backoff import BackoffPolicy, ExponentialBackoffPolicy
from .loop import Invoke, retry_call
from .policies import (
    DEFAULT_RETRYABLE_CODES,
    LimitedDurationRetryPolicy,
    LimitedErrorCountRetryPolicy,
    RetryPolicy,
)

__all__ = [
    "RetryPolicy",
    "LimitedErrorCountRetryPolicy",
    "LimitedDurationRetryPolicy",
    "DEFAULT_RETRYABLE_CODES",
    "BackoffPolicy",
    "ExponentialBackoffPolicy",
    "Invoke",
    "retry_call",
]
