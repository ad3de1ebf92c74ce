r"""Constant interval strategy."""

from __future__ import annotations

__all__ = ["ConstantInterval"]

from aretry.backoff.base import BaseBackoffStrategy


class ConstantInterval(BaseBackoffStrategy):
    """Fixed interval strategy.

    Returns the same delay after every attempt. Fixed numeric
    ``interval`` options are normalized to this strategy.

    Args:
        delay: The fixed delay in seconds (default: 0.0).

    Example:
        ```pycon
        >>> from aretry.backoff import ConstantInterval
        >>> interval = ConstantInterval(delay=2.5)
        >>> interval(1)
        2.5
        >>> interval(10)
        2.5

        ```
    """

    def __init__(self, delay: float = 0.0) -> None:
        if delay < 0:
            msg = f"delay must be non-negative, got {delay}"
            raise ValueError(msg)

        self.delay = delay

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(delay={self.delay})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConstantInterval):
            return NotImplemented
        return self.delay == other.delay

    def __hash__(self) -> int:
        return hash((self.__class__, self.delay))

    def calculate(self, attempt: int) -> float:  # noqa: ARG002
        return self.delay
