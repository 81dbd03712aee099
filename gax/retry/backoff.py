"""Backoff policies: how long to wait before the next attempt."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod

from ..core.exceptions import ConfigurationError


class BackoffPolicy(ABC):
    """Computes the delay before each retry. Instances are per call; see clone()."""

    @abstractmethod
    def next_delay(self) -> float:
        """Delay in seconds before the next attempt."""

    @abstractmethod
    def clone(self) -> BackoffPolicy:
        """Return a new policy with the same configuration and initial state."""


class ExponentialBackoffPolicy(BackoffPolicy):
    """Exponentially growing delays, capped at `maximum_delay`.

    The first delay is `initial_delay`; each following one is multiplied by
    `scaling` until it reaches `maximum_delay`. With `jitter=True` the
    returned delay is drawn uniformly from [0, current delay].
    """

    def __init__(
        self,
        initial_delay: float,
        maximum_delay: float,
        scaling: float = 2.0,
        jitter: bool = False,
    ) -> None:
        if initial_delay <= 0:
            raise ConfigurationError("initial_delay must be > 0")
        if maximum_delay < initial_delay:
            raise ConfigurationError("maximum_delay must be >= initial_delay")
        if scaling < 1.0:
            raise ConfigurationError("scaling must be >= 1.0")
        self._initial_delay = initial_delay
        self._maximum_delay = maximum_delay
        self._scaling = scaling
        self._jitter = jitter
        self._current_delay = initial_delay

    @property
    def current_delay(self) -> float:
        return self._current_delay

    def next_delay(self) -> float:
        delay = self._current_delay
        self._current_delay = min(self._current_delay * self._scaling, self._maximum_delay)
        if self._jitter:
            return random.uniform(0.0, delay)
        return delay

    def clone(self) -> ExponentialBackoffPolicy:
        return ExponentialBackoffPolicy(
            self._initial_delay, self._maximum_delay, self._scaling, self._jitter
        )
