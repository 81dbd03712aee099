"""Structured logging for retry loops.

This module provides telemetry hooks for the retry loop, emitting
structured logs that identify the method, attempt and status involved.
"""

from __future__ import annotations

import logging

from ..core.status import Status

logger = logging.getLogger(__name__)


def log_retry_scheduled(
    *,
    method: str,
    attempt: int,
    status: Status,
    delay: float,
) -> None:
    """Log a failed attempt that will be retried.

    Args:
        method: RPC method name
        attempt: One-based number of the attempt that failed
        status: Status of the failed attempt
        delay: Seconds until the next attempt
    """
    logger.info(
        "retry_scheduled",
        extra={
            "method": method,
            "attempt": attempt,
            "status_code": status.code.value,
            "status_message": status.message,
            "delay_s": delay,
        },
    )


def log_retry_exhausted(
    *,
    method: str,
    attempt: int,
    status: Status,
    permanent: bool,
) -> None:
    """Log the final failure of a call.

    Args:
        method: RPC method name
        attempt: Number of attempts made
        status: Status returned to the caller
        permanent: True if the status was not retryable, False if the budget ran out
    """
    logger.log(
        logging.DEBUG if permanent else logging.WARNING,
        "retry_exhausted",
        extra={
            "method": method,
            "attempts": attempt,
            "status_code": status.code.value,
            "status_message": status.message,
            "permanent": permanent,
        },
    )
