r"""Define the exceptions raised by the retry executor.

Failures raised by the wrapped operation are never wrapped: they are
re-raised unchanged. The classes below are only used for the failures
that the executor itself produces.
"""

from __future__ import annotations

__all__ = [
    "FATAL_EXCEPTIONS",
    "AretryError",
    "AttemptTimeoutError",
    "InvalidPolicyError",
]


# Exceptions that signal a programming defect or an unrecoverable
# interpreter fault. They are never retried, even if a failure spec
# would technically match them.
FATAL_EXCEPTIONS: tuple[type[BaseException], ...] = (
    SyntaxError,
    ImportError,
    NotImplementedError,
    MemoryError,
    RecursionError,
    SystemError,
)


class AretryError(Exception):
    """Base class for the errors raised by aretry itself."""


class InvalidPolicyError(AretryError, ValueError):
    """Raised when the retry options cannot be normalized into a policy.

    Example:
        ```pycon
        >>> from aretry.exceptions import InvalidPolicyError
        >>> error = InvalidPolicyError("tries must be >= 1, got 0")
        >>> isinstance(error, ValueError)
        True

        ```
    """


class AttemptTimeoutError(AretryError, TimeoutError):
    """Raised when a single attempt exceeds the per-attempt timeout.

    The timeout guard cannot force-stop an operation that does not
    cooperate with cancellation: when this error is produced by the
    thread-based guard, the operation may still be running in the
    background.

    Args:
        attempt: The attempt (1-indexed) that timed out.
        timeout: The per-attempt timeout in seconds.

    Example:
        ```pycon
        >>> from aretry.exceptions import AttemptTimeoutError
        >>> error = AttemptTimeoutError(attempt=2, timeout=1.5)
        >>> str(error)
        'attempt 2 timed out after 1.5 seconds'
        >>> error.attempt, error.timeout
        (2, 1.5)

        ```
    """

    def __init__(self, attempt: int, timeout: float) -> None:
        super().__init__(f"attempt {attempt} timed out after {timeout} seconds")
        self.attempt = attempt
        self.timeout = timeout
