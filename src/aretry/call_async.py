r"""Contains the asynchronous entry point of the retry executor."""

from __future__ import annotations

__all__ = ["retry_async"]

from typing import TYPE_CHECKING, Any, TypeVar

from aretry.call import resolve_config
from aretry.engine.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.config import RetryConfig

T = TypeVar("T")


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    config: RetryConfig | None = None,
    tries: int | None = None,
    interval: float | Callable[[int], float] | None = None,
    timeout: float | None = None,
    on: Any = None,
    on_return: Callable[[Any, int], bool] | None = None,
    on_retry: Callable[[BaseException | None, int], None] | None = None,
    retry_on_timeout: bool | None = None,
) -> T:
    r"""Run a zero-argument coroutine function with automatic retry logic.

    This is the asyncio counterpart of ``retry``: options and semantics
    are identical, an attempt that exceeds ``timeout`` is cancelled, and
    the delay between attempts does not block the event loop.

    Args:
        operation: The zero-argument coroutine function to run.
        config: An optional ``RetryConfig``. If None, the process-wide
            default configuration is used.
        tries: Maximum number of attempts. Must be >= 1.
        interval: Delay in seconds between attempts, or a callable
            receiving the attempt that just completed.
        timeout: Per-attempt timeout in seconds, 0 means unbounded.
        on: The retryable failures.
        on_return: Optional predicate ``(result, attempt) -> bool``.
        on_retry: Optional callback ``(error_or_none, attempt)``.
        retry_on_timeout: Whether attempt timeouts are always retried.

    Returns:
        The value returned by the accepted attempt.

    Raises:
        Exception: The failure of the last attempt, unchanged.
        InvalidPolicyError: If an option is invalid.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import retry_async
        >>> async def fetch():
        ...     return "payload"
        ...
        >>> asyncio.run(retry_async(fetch, tries=3, timeout=1.0))
        'payload'

        ```
    """
    resolved = resolve_config(
        config,
        tries=tries,
        interval=interval,
        timeout=timeout,
        on=on,
        on_return=on_return,
        on_retry=on_retry,
        retry_on_timeout=retry_on_timeout,
    )
    return await AsyncRetryExecutor(resolved.to_policy()).execute(operation)
