r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy"]

from abc import ABC, abstractmethod


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before the next
    attempt based on the index of the attempt that just completed.
    Instances are callable, which makes them valid ``interval`` values.
    """

    def __call__(self, attempt: int) -> float:
        return self.calculate(attempt)

    @abstractmethod
    def calculate(self, attempt: int) -> float:
        """Calculate the delay after a given attempt.

        Args:
            attempt: The attempt that just completed (1-indexed). For
                example, attempt=1 is the delay between the first and
                the second attempt.

        Returns:
            The delay in seconds before the next attempt.
        """


def validate_delays(base_delay: float, max_delay: float | None) -> None:
    if base_delay < 0:
        msg = f"base_delay must be non-negative, got {base_delay}"
        raise ValueError(msg)
    if max_delay is not None and max_delay <= 0:
        msg = f"max_delay must be positive if specified, got {max_delay}"
        raise ValueError(msg)
