r"""Configuration dataclass and defaults for the retry entry points.

This module provides the option defaults, a dataclass-based
configuration object and the process-wide default configuration used
when an entry point is called without an explicit ``config``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_INTERVAL",
    "DEFAULT_TIMEOUT",
    "DEFAULT_TRIES",
    "RetryConfig",
    "configure",
    "get_default_config",
    "reset_default_config",
]

import logging
import threading
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any

from aretry.policy import RetryPolicy, build_policy
from aretry.utils.validation import validate_retry_params

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)

# Default maximum number of attempts, including the first one
DEFAULT_TRIES = 3

# Default delay in seconds between two attempts
DEFAULT_INTERVAL = 0.0

# Default per-attempt timeout in seconds, 0 disables the timeout
DEFAULT_TIMEOUT = 0.0


@dataclass
class RetryConfig:
    """Configuration for the retry behavior.

    This dataclass holds the user-facing retry options. It validates
    them on creation, supports merging per-call overrides and is turned
    into an immutable ``RetryPolicy`` right before execution.

    Args:
        tries: Maximum number of attempts. Must be >= 1.
        interval: Delay in seconds between attempts, or a callable
            ``(attempt) -> float`` receiving the attempt that just
            completed.
        timeout: Per-attempt timeout in seconds. 0 means unbounded.
        on: The retryable failures: an exception class, a
            ``(class, pattern)`` pair, or a sequence of those. Defaults
            to every recoverable ``Exception``.
        on_return: Optional predicate ``(result, attempt) -> bool``; a
            successful attempt is retried when it returns ``True``.
        on_retry: Optional callback ``(error_or_none, attempt)`` invoked
            after each retried attempt, before sleeping.
        retry_on_timeout: If ``True`` (default), attempt timeouts are
            retried whatever ``on`` contains. Set to ``False`` to retry
            them only when ``on`` names ``AttemptTimeoutError``.

    Example:
        ```pycon
        >>> from aretry.config import RetryConfig
        >>> config = RetryConfig()
        >>> config.tries
        3
        >>> merged = config.merge(tries=5, interval=None)
        >>> merged.tries, merged.interval
        (5, 0.0)
        >>> config.tries  # Original unchanged
        3

        ```
    """

    tries: int = DEFAULT_TRIES
    interval: float | Callable[[int], float] = DEFAULT_INTERVAL
    timeout: float = DEFAULT_TIMEOUT
    on: Any = Exception
    on_return: Callable[[Any, int], bool] | None = None
    on_retry: Callable[[BaseException | None, int], None] | None = None
    retry_on_timeout: bool = True

    def __post_init__(self) -> None:
        validate_retry_params(
            tries=self.tries,
            interval=self.interval,
            timeout=self.timeout,
            on_return=self.on_return,
            on_retry=self.on_retry,
        )

    def merge(self, **overrides: Any) -> RetryConfig:
        """Create a new config with specified parameters overridden.

        Only non-None override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ``RetryConfig`` instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    def to_dict(self) -> dict[str, Any]:
        """Convert the configuration to a dictionary of options.

        Example:
            ```pycon
            >>> from aretry.config import RetryConfig
            >>> RetryConfig(tries=5).to_dict()["tries"]
            5

            ```
        """
        return {
            "tries": self.tries,
            "interval": self.interval,
            "timeout": self.timeout,
            "on": self.on,
            "on_return": self.on_return,
            "on_retry": self.on_retry,
            "retry_on_timeout": self.retry_on_timeout,
        }

    def to_policy(self) -> RetryPolicy:
        """Normalize the configuration into an immutable policy.

        Raises:
            InvalidPolicyError: If ``on`` contains an invalid entry.
        """
        return build_policy(**self.to_dict())


_default_config = RetryConfig()
_default_config_lock = threading.Lock()


def get_default_config() -> RetryConfig:
    """Return the process-wide default configuration.

    Example:
        ```pycon
        >>> from aretry.config import get_default_config
        >>> get_default_config().tries
        3

        ```
    """
    return _default_config


def configure(**overrides: Any) -> RetryConfig:
    """Override the process-wide default configuration.

    The overrides are merged on top of the current default
    configuration; ``None`` values are ignored.

    Args:
        **overrides: ``RetryConfig`` fields to override.

    Returns:
        The new default configuration.

    Raises:
        InvalidPolicyError: If an override fails validation.
        TypeError: If an override is not a ``RetryConfig`` field.

    Example:
        ```pycon
        >>> from aretry.config import configure, reset_default_config
        >>> configure(tries=5).tries
        5
        >>> reset_default_config().tries
        3

        ```
    """
    global _default_config  # noqa: PLW0603
    with _default_config_lock:
        _default_config = _default_config.merge(**overrides)
        logger.debug(f"Default retry configuration updated: {_default_config}")
        return _default_config


def reset_default_config() -> RetryConfig:
    """Restore the built-in default configuration and return it."""
    global _default_config  # noqa: PLW0603
    with _default_config_lock:
        _default_config = RetryConfig()
        return _default_config
