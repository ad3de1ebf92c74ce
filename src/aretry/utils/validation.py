r"""Parameter validation utilities for retry options.

This module provides the validation of the user-supplied retry options
before they are normalized into a ``RetryPolicy``.
"""

from __future__ import annotations

__all__ = ["validate_retry_params"]

from numbers import Real
from typing import Any

from aretry.exceptions import InvalidPolicyError


def validate_retry_params(
    tries: Any,
    interval: Any = 0.0,
    timeout: Any = 0.0,
    on_return: Any = None,
    on_retry: Any = None,
) -> None:
    """Validate retry parameters.

    Args:
        tries: Maximum number of attempts. Must be an integer >= 1.
        interval: Fixed delay in seconds (must be >= 0) or a callable
            taking the attempt index.
        timeout: Per-attempt timeout in seconds. Must be >= 0, and 0
            disables the timeout.
        on_return: Optional result predicate. Must be callable if
            provided.
        on_retry: Optional retry callback. Must be callable if provided.

    Raises:
        InvalidPolicyError: If any parameter fails validation.

    Example:
        ```pycon
        >>> from aretry.utils import validate_retry_params
        >>> validate_retry_params(tries=3)
        >>> validate_retry_params(tries=3, interval=0.5, timeout=10.0)
        >>> validate_retry_params(tries=3, interval=lambda attempt: attempt * 0.1)
        >>> validate_retry_params(tries=0)
        Traceback (most recent call last):
        ...
        aretry.exceptions.InvalidPolicyError: tries must be >= 1, got 0

        ```
    """
    if isinstance(tries, bool) or not isinstance(tries, int):
        msg = f"tries must be an integer, got {tries!r}"
        raise InvalidPolicyError(msg)
    if tries < 1:
        msg = f"tries must be >= 1, got {tries}"
        raise InvalidPolicyError(msg)
    if not callable(interval):
        if not _is_number(interval):
            msg = f"interval must be a number or a callable, got {interval!r}"
            raise InvalidPolicyError(msg)
        if interval < 0:
            msg = f"interval must be >= 0, got {interval}"
            raise InvalidPolicyError(msg)
    if not _is_number(timeout):
        msg = f"timeout must be a number, got {timeout!r}"
        raise InvalidPolicyError(msg)
    if timeout < 0:
        msg = f"timeout must be >= 0, got {timeout}"
        raise InvalidPolicyError(msg)
    if on_return is not None and not callable(on_return):
        msg = f"on_return must be callable, got {on_return!r}"
        raise InvalidPolicyError(msg)
    if on_retry is not None and not callable(on_retry):
        msg = f"on_retry must be callable, got {on_retry!r}"
        raise InvalidPolicyError(msg)


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)
