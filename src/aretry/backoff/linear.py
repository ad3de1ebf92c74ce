r"""Linear backoff strategy."""

from __future__ import annotations

__all__ = ["LinearBackoff"]

from aretry.backoff.base import BaseBackoffStrategy, validate_delays


class LinearBackoff(BaseBackoffStrategy):
    """Linear backoff strategy.

    Calculates delay as: base_delay * attempt, with optional max_delay cap.

    Args:
        base_delay: The base delay in seconds (default: 1.0).
        max_delay: Optional maximum delay cap in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import LinearBackoff
        >>> backoff = LinearBackoff(base_delay=1.0)
        >>> backoff(1), backoff(2), backoff(3)
        (1.0, 2.0, 3.0)
        >>> LinearBackoff(base_delay=2.0, max_delay=5.0)(6)
        5.0

        ```
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        validate_delays(base_delay, max_delay)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def calculate(self, attempt: int) -> float:
        delay = self.base_delay * attempt
        if self.max_delay is not None:
            delay = min(delay, self.max_delay)
        return delay
