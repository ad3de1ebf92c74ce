r"""Synchronous retry executor.

This module provides the ``RetryExecutor`` class that runs a zero-argument
operation with automatic retry logic.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

import logging
from typing import TYPE_CHECKING, TypeVar

from aretry.engine.executor_core import Action, evaluate_outcome, log_retry
from aretry.engine.manager import CallbackManager
from aretry.engine.matcher import FailureMatcher
from aretry.engine.strategy import IntervalCalculator
from aretry.engine.timeout import TimeoutGuard
from aretry.utils.sleep import sleep_for

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.policy import RetryPolicy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class RetryExecutor:
    """Execute an operation with automatic retry logic.

    The executor runs the attempt loop: it runs the operation under the
    timeout guard, evaluates the outcome, and either returns the value,
    raises the failure, or invokes the retry callback, sleeps and tries
    again. It uses composition with one object per concern:

    - TimeoutGuard: bounds the duration of one attempt
    - FailureMatcher: decides whether a failure is retryable
    - IntervalCalculator: computes the delay between attempts
    - CallbackManager: invokes the ``on_retry`` callback

    Sleeping between attempts blocks the calling thread.

    Args:
        policy: The retry policy.

    Attributes:
        policy: The retry policy.
        guard: Guard bounding the duration of one attempt.
        matcher: Logic for deciding whether a failure is retryable.
        strategy: Calculator for the delays between attempts.
        callbacks: Manager for invoking the retry callback.

    Example:
        ```pycon
        >>> from aretry.policy import build_policy
        >>> from aretry.engine import RetryExecutor
        >>> results = iter([OSError("flaky"), "done"])
        >>> def operation():
        ...     result = next(results)
        ...     if isinstance(result, Exception):
        ...         raise result
        ...     return result
        ...
        >>> RetryExecutor(build_policy(tries=3)).execute(operation)
        'done'

        ```
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy
        self.guard: TimeoutGuard = TimeoutGuard(policy.timeout)
        self.matcher: FailureMatcher = FailureMatcher(
            policy.retryable_failures, retry_on_timeout=policy.retry_on_timeout
        )
        self.strategy: IntervalCalculator = IntervalCalculator(policy.interval)
        self.callbacks: CallbackManager = CallbackManager(policy.on_retry)

    def execute(self, operation: Callable[[], T]) -> T:
        """Run the operation until it is accepted or the policy gives up.

        Args:
            operation: The zero-argument operation to run.

        Returns:
            The value returned by the accepted attempt, or the value of
            the last attempt when the result predicate still rejects it
            after all attempts.

        Raises:
            Exception: The failure of the last attempt, unchanged, if it
                is not retryable or no attempts are left.
                ``AttemptTimeoutError`` if the last attempt timed out.
        """
        max_attempts = self.policy.max_attempts
        attempt = 1
        while True:
            logger.debug(f"Starting attempt {attempt}/{max_attempts}")
            outcome = self.guard.run(operation, attempt)
            transition = evaluate_outcome(outcome, attempt, self.policy, self.matcher)
            if transition.action is Action.ACCEPT:
                return transition.value
            if transition.action is Action.RAISE:
                raise transition.error

            self.callbacks.on_retry(transition.error, attempt)
            delay = self.strategy.calculate_delay(attempt)
            log_retry(attempt, max_attempts, delay, transition.error)
            sleep_for(delay)
            attempt += 1
