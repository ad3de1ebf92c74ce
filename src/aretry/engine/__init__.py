r"""Retry engine implementing the attempt loop.

Public API:
    - RetryExecutor: Synchronous attempt loop
    - AsyncRetryExecutor: Asynchronous attempt loop
    - FailureMatcher: Decides whether a failure is retryable
    - IntervalCalculator: Computes the delay between attempts
    - TimeoutGuard / AsyncTimeoutGuard: Bound the duration of one attempt
    - CallbackManager: Invokes the retry callback
    - Success / Failure / TimedOut: Outcome of one attempt
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "AsyncTimeoutGuard",
    "AttemptOutcome",
    "CallbackManager",
    "Failure",
    "FailureMatcher",
    "IntervalCalculator",
    "RetryExecutor",
    "Success",
    "TimedOut",
    "TimeoutGuard",
    "is_recoverable",
]

from aretry.engine.executor import RetryExecutor
from aretry.engine.executor_async import AsyncRetryExecutor
from aretry.engine.manager import CallbackManager
from aretry.engine.matcher import FailureMatcher, is_recoverable
from aretry.engine.outcome import AttemptOutcome, Failure, Success, TimedOut
from aretry.engine.strategy import IntervalCalculator
from aretry.engine.timeout import AsyncTimeoutGuard, TimeoutGuard
