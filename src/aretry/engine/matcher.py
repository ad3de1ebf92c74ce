r"""Decide whether a failure is retryable under a policy.

Failures are split in two tiers. Recoverable failures are ordinary
``Exception`` instances caused by the environment (I/O errors, network
errors, ...), and are eligible for matching against the policy's
failure specs. Fatal failures (``FATAL_EXCEPTIONS`` and every
``BaseException`` that is not an ``Exception``) represent programming
defects or interpreter faults and are never retried.
"""

from __future__ import annotations

__all__ = ["FailureMatcher", "is_recoverable"]

import logging
from typing import TYPE_CHECKING

from aretry.exceptions import FATAL_EXCEPTIONS, AttemptTimeoutError

if TYPE_CHECKING:
    from aretry.policy import FailureSpec

logger: logging.Logger = logging.getLogger(__name__)


def is_recoverable(error: BaseException) -> bool:
    """Indicate if a failure belongs to the recoverable tier.

    Args:
        error: The failure to classify.

    Returns:
        ``True`` if the failure may be retried in principle.

    Example:
        ```pycon
        >>> from aretry.engine.matcher import is_recoverable
        >>> is_recoverable(ConnectionError("reset by peer"))
        True
        >>> is_recoverable(NotImplementedError())
        False
        >>> is_recoverable(KeyboardInterrupt())
        False

        ```
    """
    return isinstance(error, Exception) and not isinstance(error, FATAL_EXCEPTIONS)


class FailureMatcher:
    """Match failures against the retryable failure specs of a policy.

    Args:
        specs: The ordered failure specs.
        retry_on_timeout: If ``True``, ``AttemptTimeoutError`` always
            matches regardless of ``specs``.

    Example:
        ```pycon
        >>> from aretry.policy import normalize_failure_specs
        >>> from aretry.engine.matcher import FailureMatcher
        >>> matcher = FailureMatcher(normalize_failure_specs((OSError, r"HTTP")))
        >>> matcher.matches(OSError("HTTP 502"))
        True
        >>> matcher.matches(OSError("permission denied"))
        False

        ```
    """

    def __init__(self, specs: tuple[FailureSpec, ...], retry_on_timeout: bool = True) -> None:
        self.specs = specs
        self.retry_on_timeout = retry_on_timeout

    def matches(self, error: BaseException) -> bool:
        """Indicate if a failure should be retried.

        Args:
            error: The failure raised by the attempt, or the
                ``AttemptTimeoutError`` synthesized for a timed out
                attempt.

        Returns:
            ``True`` if the failure is retryable.
        """
        if self.retry_on_timeout and isinstance(error, AttemptTimeoutError):
            return True
        if not is_recoverable(error):
            logger.debug(f"{type(error).__name__} is not recoverable and will not be retried")
            return False
        for spec in self.specs:
            if spec.applies_to(error):
                return True
        logger.debug(f"{type(error).__name__} does not match any retryable failure spec")
        return False
