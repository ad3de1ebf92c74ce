r"""Fibonacci backoff strategy."""

from __future__ import annotations

__all__ = ["FibonacciBackoff"]

from aretry.backoff.base import BaseBackoffStrategy, validate_delays


class FibonacciBackoff(BaseBackoffStrategy):
    """Fibonacci backoff strategy.

    Calculates delay as: base_delay * fibonacci(attempt), with optional
    max_delay cap. The sequence (1, 1, 2, 3, 5, 8, ...) grows slower than
    exponential backoff.

    Args:
        base_delay: The base delay in seconds (default: 1.0).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import FibonacciBackoff
        >>> backoff = FibonacciBackoff(base_delay=1.0)
        >>> [backoff(attempt) for attempt in range(1, 7)]
        [1.0, 1.0, 2.0, 3.0, 5.0, 8.0]

        ```
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        validate_delays(base_delay, max_delay)
        self.base_delay = base_delay
        self.max_delay = max_delay

    @staticmethod
    def _fibonacci(n: int) -> int:
        """Return the n-th Fibonacci number, with fib(1) == fib(2) == 1."""
        if n <= 0:
            return 0
        a, b = 0, 1
        for _ in range(n - 1):
            a, b = b, a + b
        return b

    def calculate(self, attempt: int) -> float:
        delay = self.base_delay * self._fibonacci(attempt)
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
