r"""Interval strategies for delays between retry attempts.

Every strategy is a callable taking the 1-indexed attempt that just
completed and returning the delay in seconds, so an instance can be
passed directly as the ``interval`` option.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffStrategy",
    "ConstantInterval",
    "ExponentialBackoff",
    "FibonacciBackoff",
    "LinearBackoff",
]

from aretry.backoff.base import BaseBackoffStrategy
from aretry.backoff.constant import ConstantInterval
from aretry.backoff.exponential import ExponentialBackoff
from aretry.backoff.fibonacci import FibonacciBackoff
from aretry.backoff.linear import LinearBackoff
