r"""Compute the delay between two attempts."""

from __future__ import annotations

__all__ = ["IntervalCalculator"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class IntervalCalculator:
    """Calculate the delay before the next attempt.

    The interval function is called with the index of the attempt that
    just completed, not the upcoming one. Its result is not capped;
    negative values are treated as an immediate retry.

    Args:
        interval: Normalized interval function ``(attempt) -> float``.

    Example:
        ```pycon
        >>> from aretry.engine.strategy import IntervalCalculator
        >>> calculator = IntervalCalculator(lambda attempt: (2**attempt - 1) / 2)
        >>> [calculator.calculate_delay(attempt) for attempt in (1, 2, 3)]
        [0.5, 1.5, 3.5]
        >>> IntervalCalculator(lambda attempt: -1.0).calculate_delay(1)
        0.0

        ```
    """

    def __init__(self, interval: Callable[[int], float]) -> None:
        self.interval = interval

    def calculate_delay(self, attempt: int) -> float:
        """Calculate the delay after ``attempt``.

        Args:
            attempt: The attempt that just completed (1-indexed).

        Returns:
            The delay in seconds, never negative.
        """
        delay = float(self.interval(attempt))
        if delay < 0:
            logger.debug(f"Interval returned a negative delay ({delay}), retrying immediately")
            return 0.0
        return delay
