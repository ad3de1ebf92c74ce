r"""Contains the synchronous entry point of the retry executor."""

from __future__ import annotations

__all__ = ["retry", "resolve_config"]

from typing import TYPE_CHECKING, Any, TypeVar

from aretry.config import RetryConfig, get_default_config
from aretry.engine.executor import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

T = TypeVar("T")


def resolve_config(config: RetryConfig | None = None, **overrides: Any) -> RetryConfig:
    """Merge per-call options on top of a configuration.

    Args:
        config: An optional ``RetryConfig``. If None, the process-wide
            default configuration is used.
        **overrides: Per-call options; ``None`` values are ignored.

    Returns:
        The configuration to execute with.
    """
    base = config if config is not None else get_default_config()
    return base.merge(**overrides)


def retry(
    operation: Callable[[], T],
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
    r"""Run a zero-argument operation with automatic retry logic.

    The operation is attempted up to ``tries`` times. A failure that
    matches ``on`` (any recoverable exception by default) or an attempt
    that exceeds ``timeout`` is retried after ``interval`` seconds; any
    other failure propagates at once. A successful attempt is returned,
    unless ``on_return`` asks for a retry.

    Args:
        operation: The zero-argument operation to run. Use
            ``functools.partial`` or a lambda to bind arguments.
        config: An optional ``RetryConfig``. If None, the process-wide
            default configuration is used. Keyword options below
            override it when not None.
        tries: Maximum number of attempts. Must be >= 1.
        interval: Delay in seconds between attempts, or a callable
            receiving the attempt that just completed (1-indexed).
        timeout: Per-attempt timeout in seconds, 0 means unbounded.
            A synchronous operation that times out is abandoned, not
            stopped: it may keep running on a background thread.
        on: The retryable failures: an exception class, an
            ``(exception class, pattern)`` pair or a sequence of those.
        on_return: Optional predicate ``(result, attempt) -> bool``
            forcing the retry of a successful attempt.
        on_retry: Optional callback ``(error_or_none, attempt)`` invoked
            before sleeping between attempts. Its exceptions propagate.
        retry_on_timeout: Whether attempt timeouts are always retried.

    Returns:
        The value returned by the accepted attempt. If ``on_return``
        still rejects the value of the last attempt, that value is
        returned.

    Raises:
        Exception: The failure of the last attempt, unchanged.
        AttemptTimeoutError: If the last attempt timed out.
        InvalidPolicyError: If an option is invalid.

    Example:
        ```pycon
        >>> from aretry import retry
        >>> values = iter([1, 2, 3])
        >>> retry(lambda: next(values), tries=3, on_return=lambda value, attempt: value < 10)
        3
        >>> retry(lambda: "ok", tries=5, interval=0.5, on=[OSError, (ValueError, r"HTTP")])
        'ok'

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
    return RetryExecutor(resolved.to_policy()).execute(operation)
