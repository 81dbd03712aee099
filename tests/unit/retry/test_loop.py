"""Unit tests for the retry loop."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta

import pytest

from gax.core import CallContext, Status, StatusCode
from gax.retry import (
    ExponentialBackoffPolicy,
    LimitedDurationRetryPolicy,
    LimitedErrorCountRetryPolicy,
    retry_call,
)

UNAVAILABLE = Status(StatusCode.UNAVAILABLE, "try again")


class FlakyOperation:
    """Fails with the given statuses, then succeeds."""

    def __init__(self, *failures: Status) -> None:
        self.failures = list(failures)
        self.calls = 0

    async def __call__(self, context: CallContext, request: str, response: list) -> Status:
        self.calls += 1
        if self.failures:
            return self.failures.pop(0)
        response.append(request)
        return Status()


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


async def run(operation, retry_policy, backoff_policy=None, sleep=None, response=None):
    return await retry_call(
        CallContext(),
        "request",
        response if response is not None else [],
        operation,
        retry_policy,
        backoff_policy or ExponentialBackoffPolicy(0.01, 0.04),
        method="Test",
        sleep=sleep or RecordingSleep(),
    )


class TestRetryCall:
    """Test the retry loop contract."""

    @pytest.mark.asyncio
    async def test_success_first_try(self):
        """An OK status returns at once without consulting the policies."""
        operation = FlakyOperation()
        sleep = RecordingSleep()
        response: list = []

        status = await run(operation, LimitedErrorCountRetryPolicy(3), sleep=sleep, response=response)

        assert status.ok
        assert operation.calls == 1
        assert sleep.delays == []
        assert response == ["request"]

    @pytest.mark.asyncio
    async def test_fails_twice_then_succeeds(self):
        """Two failures under a 2-retry budget end in OK after 3 calls."""
        operation = FlakyOperation(UNAVAILABLE, UNAVAILABLE)
        sleep = RecordingSleep()

        status = await run(operation, LimitedErrorCountRetryPolicy(2), sleep=sleep)

        assert status == Status()
        assert operation.calls == 3
        assert sleep.delays == pytest.approx([0.01, 0.02])

    @pytest.mark.asyncio
    @pytest.mark.parametrize("retries", [0, 1, 4])
    async def test_always_failing_makes_n_plus_one_attempts(self, retries):
        """The final failure status is returned unchanged after N+1 attempts."""
        last = Status(StatusCode.UNAVAILABLE, "last")
        failures = [UNAVAILABLE] * retries + [last]
        operation = FlakyOperation(*failures, UNAVAILABLE)

        status = await run(operation, LimitedErrorCountRetryPolicy(retries))

        assert status is last
        assert operation.calls == retries + 1

    @pytest.mark.asyncio
    async def test_permanent_failure_not_retried(self):
        """A non-retryable status is final on the first attempt."""
        not_found = Status(StatusCode.NOT_FOUND, "gone")
        operation = FlakyOperation(not_found)
        sleep = RecordingSleep()

        status = await run(operation, LimitedErrorCountRetryPolicy(5), sleep=sleep)

        assert status == not_found
        assert operation.calls == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_logs_retries_and_exhaustion(self, caplog):
        """Scheduled retries and the final failure are logged."""
        operation = FlakyOperation(UNAVAILABLE, UNAVAILABLE)

        with caplog.at_level(logging.INFO, logger="gax.retry.telemetry"):
            await run(operation, LimitedErrorCountRetryPolicy(1))

        messages = [record.getMessage() for record in caplog.records]
        assert messages == ["retry_scheduled", "retry_exhausted"]
        assert caplog.records[0].attempt == 1
        assert caplog.records[1].attempts == 2
        assert caplog.records[1].levelno == logging.WARNING


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class TimingOutOperation:
    """Always times out, using up its deadline and one second of the clock."""

    def __init__(self, clock: FakeClock) -> None:
        self.clock = clock
        self.deadlines: list[datetime | None] = []

    async def __call__(self, context: CallContext, request: str, response: list) -> Status:
        self.deadlines.append(context.deadline)
        self.clock.now += 1.0
        context.deadline = datetime.now(UTC) - timedelta(seconds=1)
        return Status(StatusCode.DEADLINE_EXCEEDED, "timed out")


class TestRetryCallDeadlines:
    """Test per-attempt deadlines on a shared context."""

    @pytest.mark.asyncio
    async def test_each_attempt_gets_a_fresh_deadline(self):
        """An expired attempt deadline does not carry over to the next attempt."""
        clock = FakeClock()
        operation = TimingOutOperation(clock)
        context = CallContext()
        started = datetime.now(UTC)

        await retry_call(
            context,
            "request",
            [],
            operation,
            LimitedDurationRetryPolicy(2.5, maximum_rpc_timeout=1.0, clock=clock),
            ExponentialBackoffPolicy(0.01, 0.04),
            sleep=RecordingSleep(),
        )

        assert len(operation.deadlines) == 3
        assert all(deadline > started for deadline in operation.deadlines)
        assert context.deadline is None

    @pytest.mark.asyncio
    async def test_caller_deadline_bounds_attempts_and_is_restored(self):
        clock = FakeClock()
        operation = TimingOutOperation(clock)
        caller_deadline = datetime.now(UTC) + timedelta(seconds=0.2)
        context = CallContext(deadline=caller_deadline)

        await retry_call(
            context,
            "request",
            [],
            operation,
            LimitedDurationRetryPolicy(2.5, maximum_rpc_timeout=1.0, clock=clock),
            ExponentialBackoffPolicy(0.01, 0.04),
            sleep=RecordingSleep(),
        )

        assert operation.deadlines == [caller_deadline] * 3
        assert context.deadline == caller_deadline
