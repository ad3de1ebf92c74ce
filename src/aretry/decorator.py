r"""Contains the decorator form of the retry executor."""

from __future__ import annotations

__all__ = ["retryable"]

import functools
import inspect
from typing import TYPE_CHECKING, Any

from aretry.call import resolve_config
from aretry.engine.executor import RetryExecutor
from aretry.engine.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.config import RetryConfig


def retryable(
    func: Callable[..., Any] | None = None,
    *,
    config: RetryConfig | None = None,
    **options: Any,
) -> Any:
    r"""Wrap a function so that each call runs with automatic retry logic.

    The decorator works with and without arguments, and with both plain
    functions and ``async def`` functions. The options are the keyword
    options of ``retry``. They are validated when the function is
    decorated, and merged on top of ``config`` (or of the process-wide
    default configuration) when the function is called.

    Args:
        func: The function to wrap. Only set when used without
            arguments (``@retryable``).
        config: An optional ``RetryConfig``.
        **options: Retry options (``tries``, ``interval``, ``timeout``,
            ``on``, ``on_return``, ``on_retry``, ``retry_on_timeout``).

    Returns:
        The wrapped function, or a decorator.

    Raises:
        InvalidPolicyError: If an option is invalid.

    Example:
        ```pycon
        >>> from aretry import retryable
        >>> calls = []
        >>> @retryable(tries=3, on=ConnectionError)
        ... def fetch(key):
        ...     calls.append(key)
        ...     if len(calls) < 2:
        ...         raise ConnectionError("reset by peer")
        ...     return key.upper()
        ...
        >>> fetch("abc")
        'ABC'
        >>> len(calls)
        2

        ```
    """
    resolve_config(config, **options).to_policy()

    def decorator(function: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(function):

            @functools.wraps(function)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                policy = resolve_config(config, **options).to_policy()
                return await AsyncRetryExecutor(policy).execute(
                    functools.partial(function, *args, **kwargs)
                )

            return async_wrapper

        @functools.wraps(function)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            policy = resolve_config(config, **options).to_policy()
            return RetryExecutor(policy).execute(functools.partial(function, *args, **kwargs))

        return wrapper

    if func is not None:
        return decorator(func)
    return decorator
