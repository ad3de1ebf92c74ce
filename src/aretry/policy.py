r"""Normalize user-supplied retry options into an immutable policy.

This module turns the loosely typed options accepted by the public entry
points (a single exception class or a sequence of them, a fixed delay or
a callable, ...) into a validated ``RetryPolicy`` that the executors read
without further checks.
"""

from __future__ import annotations

__all__ = [
    "FailureSpec",
    "RetryPolicy",
    "build_policy",
    "normalize_failure_specs",
    "normalize_interval",
]

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from aretry.backoff import ConstantInterval
from aretry.exceptions import InvalidPolicyError
from aretry.utils.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True)
class FailureSpec:
    """Describe one kind of retryable failure.

    Attributes:
        kind: The exception class. Instances of the class or of any
            subclass match.
        pattern: Optional regular expression that must be found in the
            failure message (``str(error)``) for the spec to apply.

    Example:
        ```pycon
        >>> import re
        >>> from aretry.policy import FailureSpec
        >>> spec = FailureSpec(OSError, re.compile("HTTP"))
        >>> spec.applies_to(OSError("HTTP 503"))
        True
        >>> spec.applies_to(OSError("disk full"))
        False
        >>> FailureSpec(OSError).applies_to(ConnectionError("reset"))
        True

        ```
    """

    kind: type[BaseException]
    pattern: re.Pattern[str] | None = None

    def applies_to(self, error: BaseException) -> bool:
        """Indicate if the spec matches the given failure.

        Args:
            error: The failure to test.

        Returns:
            ``True`` if the failure is an instance of ``kind`` and, when
            a pattern is set, its message matches the pattern.
        """
        if not isinstance(error, self.kind):
            return False
        return self.pattern is None or self.pattern.search(str(error)) is not None


def _is_exception_class(value: Any) -> bool:
    return isinstance(value, type) and issubclass(value, BaseException)


def _is_pattern(value: Any) -> bool:
    # Failure messages are str, so bytes patterns can never match them
    if isinstance(value, re.Pattern):
        return isinstance(value.pattern, str)
    return isinstance(value, str)


def _to_failure_spec(value: Any) -> FailureSpec:
    if isinstance(value, FailureSpec):
        return value
    if _is_exception_class(value):
        return FailureSpec(kind=value)
    if isinstance(value, tuple) and len(value) == 2:
        kind, pattern = value
        if _is_exception_class(kind) and _is_pattern(pattern):
            return FailureSpec(kind=kind, pattern=re.compile(pattern))
    msg = (
        "on entries must be exception classes or (exception class, pattern) "
        f"pairs, got {value!r}"
    )
    raise InvalidPolicyError(msg)


def normalize_failure_specs(on: Any) -> tuple[FailureSpec, ...]:
    r"""Normalize the ``on`` option into a tuple of failure specs.

    A 2-tuple whose second item is a string or a compiled pattern is
    read as one ``(exception class, pattern)`` pair; any other tuple or
    iterable is read as a sequence of specs.

    Args:
        on: An exception class, a ``(class, pattern)`` pair, a
            ``FailureSpec``, or a sequence of those.

    Returns:
        The normalized failure specs, in their original order.

    Raises:
        InvalidPolicyError: If an entry is not a valid failure spec.

    Example:
        ```pycon
        >>> from aretry.policy import normalize_failure_specs
        >>> normalize_failure_specs(KeyError)
        (FailureSpec(kind=<class 'KeyError'>, pattern=None),)
        >>> specs = normalize_failure_specs([KeyError, (OSError, r"HTTP")])
        >>> [spec.kind.__name__ for spec in specs]
        ['KeyError', 'OSError']
        >>> specs[1].pattern.pattern
        'HTTP'

        ```
    """
    if isinstance(on, FailureSpec) or _is_exception_class(on):
        return (_to_failure_spec(on),)
    if isinstance(on, tuple) and len(on) == 2 and _is_pattern(on[1]):
        return (_to_failure_spec(on),)
    if isinstance(on, (str, bytes)) or not isinstance(on, Iterable):
        msg = f"on must be an exception class, a pair or a sequence of them, got {on!r}"
        raise InvalidPolicyError(msg)
    return tuple(_to_failure_spec(item) for item in on)


def normalize_interval(interval: float | Callable[[int], float]) -> Callable[[int], float]:
    """Normalize the ``interval`` option into a callable.

    Args:
        interval: A fixed delay in seconds, or a callable taking the
            1-indexed attempt that just completed.

    Returns:
        A callable returning the delay for a given attempt.

    Example:
        ```pycon
        >>> from aretry.policy import normalize_interval
        >>> normalize_interval(1.5)(3)
        1.5
        >>> normalize_interval(lambda attempt: (2**attempt - 1) / 2)(2)
        1.5

        ```
    """
    if callable(interval):
        return interval
    return ConstantInterval(delay=interval)


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable, validated description of how to retry an operation.

    Use ``build_policy`` (or ``RetryConfig.to_policy``) to create a
    policy from the user-facing options.

    Attributes:
        max_attempts: Maximum number of attempts, >= 1.
        interval: Callable returning the delay after a given attempt.
        timeout: Per-attempt timeout in seconds, 0 means unbounded.
        retryable_failures: The failure specs eligible for retry.
        retry_on_timeout: If ``True``, attempt timeouts are always
            retryable.
        retry_on_result: Optional predicate ``(result, attempt) -> bool``
            forcing a retry of a successful attempt.
        on_retry: Optional callback ``(error_or_none, attempt)`` invoked
            before sleeping between attempts.
    """

    max_attempts: int = 3
    interval: Callable[[int], float] = field(default_factory=ConstantInterval)
    timeout: float = 0.0
    retryable_failures: tuple[FailureSpec, ...] = (FailureSpec(Exception),)
    retry_on_timeout: bool = True
    retry_on_result: Callable[[Any, int], bool] | None = None
    on_retry: Callable[[BaseException | None, int], None] | None = None


def build_policy(
    *,
    tries: int = 3,
    interval: float | Callable[[int], float] = 0.0,
    timeout: float = 0.0,
    on: Any = Exception,
    on_return: Callable[[Any, int], bool] | None = None,
    on_retry: Callable[[BaseException | None, int], None] | None = None,
    retry_on_timeout: bool = True,
) -> RetryPolicy:
    """Validate and normalize retry options into a ``RetryPolicy``.

    Args:
        tries: Maximum number of attempts. Must be >= 1.
        interval: Fixed delay in seconds (>= 0) or a callable taking the
            attempt that just completed.
        timeout: Per-attempt timeout in seconds. Must be >= 0, and 0
            means unbounded.
        on: The retryable failures: an exception class, a
            ``(class, pattern)`` pair, or a sequence of those.
        on_return: Optional predicate ``(result, attempt) -> bool``.
        on_retry: Optional callback ``(error_or_none, attempt)``.
        retry_on_timeout: Whether attempt timeouts are always retryable.

    Returns:
        The normalized policy.

    Raises:
        InvalidPolicyError: If an option fails validation.

    Example:
        ```pycon
        >>> from aretry.policy import build_policy
        >>> policy = build_policy(tries=5, interval=0.5, on=[OSError, KeyError])
        >>> policy.max_attempts
        5
        >>> policy.interval(3)
        0.5
        >>> len(policy.retryable_failures)
        2

        ```
    """
    validate_retry_params(
        tries=tries,
        interval=interval,
        timeout=timeout,
        on_return=on_return,
        on_retry=on_retry,
    )
    return RetryPolicy(
        max_attempts=tries,
        interval=normalize_interval(interval),
        timeout=float(timeout),
        retryable_failures=normalize_failure_specs(on),
        retry_on_timeout=bool(retry_on_timeout),
        retry_on_result=on_return,
        on_retry=on_retry,
    )
