r"""Asynchronous retry executor.

This module provides the ``AsyncRetryExecutor`` class that runs a
zero-argument coroutine function with automatic retry logic.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import logging
from typing import TYPE_CHECKING, TypeVar

from aretry.engine.executor_core import Action, evaluate_outcome, log_retry
from aretry.engine.manager import CallbackManager
from aretry.engine.matcher import FailureMatcher
from aretry.engine.strategy import IntervalCalculator
from aretry.engine.timeout import AsyncTimeoutGuard
from aretry.utils.sleep import async_sleep_for

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.policy import RetryPolicy

T = TypeVar("T")

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Execute a coroutine function with automatic retry logic.

    This is the asyncio counterpart of ``RetryExecutor``: the transitions
    are identical, the attempt is guarded by an ``asyncio.Task`` that is
    cancelled at the deadline, and the delay between attempts uses
    ``asyncio.sleep`` so other tasks keep running.

    The result predicate and the retry callback are plain synchronous
    callables and should be fast.

    Args:
        policy: The retry policy.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.policy import build_policy
        >>> from aretry.engine import AsyncRetryExecutor
        >>> async def operation():
        ...     return "done"
        ...
        >>> asyncio.run(AsyncRetryExecutor(build_policy()).execute(operation))
        'done'

        ```
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy
        self.guard: AsyncTimeoutGuard = AsyncTimeoutGuard(policy.timeout)
        self.matcher: FailureMatcher = FailureMatcher(
            policy.retryable_failures, retry_on_timeout=policy.retry_on_timeout
        )
        self.strategy: IntervalCalculator = IntervalCalculator(policy.interval)
        self.callbacks: CallbackManager = CallbackManager(policy.on_retry)

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run the coroutine function until it is accepted or the policy
        gives up.

        Args:
            operation: The zero-argument coroutine function to run.

        Returns:
            The value of the accepted attempt, or the value of the last
            attempt when the result predicate still rejects it.

        Raises:
            Exception: The failure of the last attempt, unchanged, if it
                is not retryable or no attempts are left.
        """
        max_attempts = self.policy.max_attempts
        attempt = 1
        while True:
            logger.debug(f"Starting attempt {attempt}/{max_attempts}")
            outcome = await self.guard.run(operation, attempt)
            transition = evaluate_outcome(outcome, attempt, self.policy, self.matcher)
            if transition.action is Action.ACCEPT:
                return transition.value
            if transition.action is Action.RAISE:
                raise transition.error

            self.callbacks.on_retry(transition.error, attempt)
            delay = self.strategy.calculate_delay(attempt)
            log_retry(attempt, max_attempts, delay, transition.error)
            await async_sleep_for(delay)
            attempt += 1
