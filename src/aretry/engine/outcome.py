r"""Outcome of a single attempt.

An attempt ends in exactly one of three ways: the operation returned a
value, it raised a failure, or it exceeded the per-attempt timeout.
Outcomes only live inside the attempt loop.
"""

from __future__ import annotations

__all__ = ["AttemptOutcome", "Failure", "Success", "TimedOut"]

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Success:
    """The operation returned ``value``."""

    value: Any


@dataclass(frozen=True)
class Failure:
    """The operation raised ``error``."""

    error: Exception


@dataclass(frozen=True)
class TimedOut:
    """The operation did not complete within ``timeout`` seconds."""

    timeout: float


AttemptOutcome = Union[Success, Failure, TimedOut]
