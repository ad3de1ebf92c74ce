r"""Shared transition logic of the attempt loop.

Both the synchronous and the asynchronous executors drive the same state
machine. This module holds the transition function that turns the
outcome of one attempt into the next step (accept, retry or raise), so
that attempt counting and termination are decided in one place.
"""

from __future__ import annotations

__all__ = ["Action", "Transition", "evaluate_outcome", "log_retry", "outcome_error"]

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from aretry.engine.outcome import AttemptOutcome, Success, TimedOut
from aretry.exceptions import AttemptTimeoutError
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretry.engine.matcher import FailureMatcher
    from aretry.policy import RetryPolicy

logger: logging.Logger = logging.getLogger(__name__)


class Action(enum.Enum):
    """Next step of the attempt loop."""

    ACCEPT = "accept"
    RETRY = "retry"
    RAISE = "raise"


@dataclass(frozen=True)
class Transition:
    """Result of evaluating one attempt.

    Attributes:
        action: What the loop does next.
        value: The value returned by the attempt, if any.
        error: The failure of the attempt, if any. ``None`` for a retry
            requested by the result predicate.
    """

    action: Action
    value: Any = None
    error: BaseException | None = None


def outcome_error(outcome: AttemptOutcome, attempt: int) -> BaseException | None:
    """Return the failure carried by an outcome.

    A timed out attempt is materialized as an ``AttemptTimeoutError``.

    Args:
        outcome: The outcome of the attempt.
        attempt: The attempt (1-indexed).

    Returns:
        The failure, or ``None`` for a successful attempt.
    """
    if isinstance(outcome, Success):
        return None
    if isinstance(outcome, TimedOut):
        return AttemptTimeoutError(attempt=attempt, timeout=outcome.timeout)
    return outcome.error


def evaluate_outcome(
    outcome: AttemptOutcome,
    attempt: int,
    policy: RetryPolicy,
    matcher: FailureMatcher,
) -> Transition:
    """Decide the next step of the attempt loop.

    Rules:
    - A successful attempt is accepted unless the result predicate asks
      for a retry. A result retry on the last attempt accepts the last
      value instead of failing.
    - A failed or timed out attempt that does not match the retryable
      failures is raised at once, whatever budget remains. A matching
      failure is retried, or raised on the last attempt.
    - A raised failure never consults the result predicate.

    Args:
        outcome: The outcome of the attempt.
        attempt: The attempt that just completed (1-indexed).
        policy: The retry policy.
        matcher: The failure matcher built from the policy.

    Returns:
        The transition to apply.

    Example:
        ```pycon
        >>> from aretry.policy import build_policy
        >>> from aretry.engine.executor_core import evaluate_outcome
        >>> from aretry.engine.matcher import FailureMatcher
        >>> from aretry.engine.outcome import Failure, Success
        >>> policy = build_policy(tries=2, on=OSError)
        >>> matcher = FailureMatcher(policy.retryable_failures)
        >>> evaluate_outcome(Success(1), 1, policy, matcher).action
        <Action.ACCEPT: 'accept'>
        >>> evaluate_outcome(Failure(OSError("x")), 1, policy, matcher).action
        <Action.RETRY: 'retry'>
        >>> evaluate_outcome(Failure(OSError("x")), 2, policy, matcher).action
        <Action.RAISE: 'raise'>
        >>> evaluate_outcome(Failure(KeyError("x")), 1, policy, matcher).action
        <Action.RAISE: 'raise'>

        ```
    """
    is_last_attempt = attempt >= policy.max_attempts

    if isinstance(outcome, Success):
        if policy.retry_on_result is None or not policy.retry_on_result(outcome.value, attempt):
            return Transition(Action.ACCEPT, value=outcome.value)
        if is_last_attempt:
            logger.debug(
                f"Result rejected on final attempt {attempt}/{policy.max_attempts}, "
                "returning last value"
            )
            return Transition(Action.ACCEPT, value=outcome.value)
        return Transition(Action.RETRY, value=outcome.value)

    error = outcome_error(outcome, attempt)
    if not matcher.matches(error):
        logger.debug(f"Attempt {attempt} raised non-retryable {type(error).__name__}: {error}")
        return Transition(Action.RAISE, error=error)
    if is_last_attempt:
        logger.debug(
            f"Attempt {attempt}/{policy.max_attempts} raised {type(error).__name__}, "
            "no attempts left"
        )
        return Transition(Action.RAISE, error=error)
    return Transition(Action.RETRY, error=error)


def log_retry(
    attempt: int, max_attempts: int, delay: float, error: BaseException | None
) -> None:
    """Emit the structured debug record of a retry."""
    reason = "result rejected" if error is None else f"{type(error).__name__}: {error}"
    log_structured(
        logger,
        logging.DEBUG,
        f"Attempt {attempt}/{max_attempts} will be retried in {delay:.2f}s ({reason})",
        attempt=attempt,
        max_attempts=max_attempts,
        delay=delay,
        error_type=None if error is None else type(error).__name__,
    )
