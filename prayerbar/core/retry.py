"""Bounded retry with linear backoff, modelled as an explicit state machine.

States:
    ATTEMPTING(n)  attempt number n (1-based) is about to run
    SUCCESS        the last attempt succeeded
    EXHAUSTED      attempt max_attempts failed; no further attempts

Backoff:
    delay after failed attempt n = n * base_delay

    Linear growth, no jitter.  The ceiling is the attempt count, not a
    time budget.  No sleep follows the final failed attempt.

The transition function and the delay function are pure.  Only
run_with_retry() touches the clock, through an injected sleep callable.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPhase(str, Enum):
    ATTEMPTING = "attempting"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class RetryState:
    phase: RetryPhase
    attempt: int


class RetryExhaustedError(Exception):
    """Raised when every permitted attempt has failed."""

    def __init__(self, attempts: int, last_error: BaseException | None) -> None:
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gave up after {attempts} attempt(s): {last_error}")


def backoff_delay(attempt: int, base_delay: float) -> float:
    """Seconds to wait after failed attempt number *attempt*."""
    if attempt < 1:
        raise ValueError("attempt numbers start at 1")
    return attempt * base_delay


@dataclass(frozen=True)
class RetryPolicy:
    """Attempt ceiling and linear backoff step (seconds)."""

    max_attempts: int = 20
    base_delay: float = 0.5

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay < 0:
            raise ValueError("base_delay must not be negative")

    def start(self) -> RetryState:
        return RetryState(RetryPhase.ATTEMPTING, 1)

    def advance(self, state: RetryState, succeeded: bool) -> RetryState:
        """Pure transition out of an ATTEMPTING state."""
        if state.phase is not RetryPhase.ATTEMPTING:
            raise ValueError(f"cannot advance from terminal phase {state.phase.value}")
        if succeeded:
            return RetryState(RetryPhase.SUCCESS, state.attempt)
        if state.attempt >= self.max_attempts:
            return RetryState(RetryPhase.EXHAUSTED, state.attempt)
        return RetryState(RetryPhase.ATTEMPTING, state.attempt + 1)

    def delay_before(self, state: RetryState) -> float:
        """Wait preceding the attempt *state* describes (0 for the first)."""
        if state.phase is not RetryPhase.ATTEMPTING or state.attempt <= 1:
            return 0.0
        return backoff_delay(state.attempt - 1, self.base_delay)


def run_with_retry(
    operation: Callable[[], T],
    policy: RetryPolicy,
    *,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call *operation* until it succeeds or *policy* is exhausted.

    Exceptions outside *retry_on* propagate immediately.

    Raises:
        RetryExhaustedError: After max_attempts failures.
    """
    state = policy.start()
    last_error: BaseException | None = None

    while state.phase is RetryPhase.ATTEMPTING:
        delay = policy.delay_before(state)
        if delay > 0:
            sleep(delay)
        try:
            result = operation()
        except retry_on as exc:
            last_error = exc
            logger.warning("Attempt %d/%d failed: %s", state.attempt, policy.max_attempts, exc)
            state = policy.advance(state, succeeded=False)
            continue
        state = policy.advance(state, succeeded=True)
        return result

    raise RetryExhaustedError(state.attempt, last_error)
