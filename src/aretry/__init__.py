r"""aretry - Retry executor for unreliable operations.

This package runs a caller-supplied operation repeatedly, according to a
declarative policy, until it succeeds, its attempts are exhausted, or a
non-retryable failure occurs. It absorbs transient failures of network
calls, file I/O and similar operations without bespoke loop, backoff or
timeout code.

Key Features:
    - Retryable failures selected by exception class and message pattern
    - Recoverable/fatal failure tiers: programming errors are never retried
    - Fixed intervals or computed ones (exponential, linear, Fibonacci, custom)
    - Per-attempt timeout
    - Retry on returned values through a result predicate
    - ``on_retry`` observer callback
    - Function, decorator and asyncio entry points
    - httpx helpers for transient HTTP failures

Example:
    ```pycon
    >>> from aretry import retry, retryable
    >>> from aretry.backoff import ExponentialBackoff
    >>> retry(lambda: "ok", tries=5, interval=ExponentialBackoff(base_delay=0.1))
    'ok'
    >>> @retryable(tries=3, on=(OSError, r"HTTP"))
    ... def fetch():
    ...     return "payload"
    ...
    >>> fetch()
    'payload'

    ```
"""

from __future__ import annotations

__all__ = [
    "AretryError",
    "AttemptTimeoutError",
    "FailureSpec",
    "InvalidPolicyError",
    "RetryConfig",
    "RetryPolicy",
    "__version__",
    "build_policy",
    "configure",
    "get_default_config",
    "reset_default_config",
    "retry",
    "retry_async",
    "retryable",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.call import retry
from aretry.call_async import retry_async
from aretry.config import RetryConfig, configure, get_default_config, reset_default_config
from aretry.decorator import retryable
from aretry.exceptions import AretryError, AttemptTimeoutError, InvalidPolicyError
from aretry.policy import FailureSpec, RetryPolicy, build_policy

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
