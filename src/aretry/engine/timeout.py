r"""Bound the wall-clock duration of a single attempt.

Two guards are provided. ``TimeoutGuard`` runs a synchronous operation
on a worker thread and stops waiting for it at the deadline.
``AsyncTimeoutGuard`` runs a coroutine as a task and cancels it at the
deadline.

Note:
    Python cannot force-stop a thread. When a synchronous attempt times
    out, the guard returns ``TimedOut`` and unblocks its caller, but the
    operation keeps running on an abandoned daemon thread until it
    returns by itself, and its side effects may still happen. Only
    operations that cooperate with cancellation (coroutines with
    ``AsyncTimeoutGuard``) are actually stopped.
"""

from __future__ import annotations

__all__ = ["AsyncTimeoutGuard", "TimeoutGuard"]

import asyncio
import contextvars
import logging
import threading
from typing import TYPE_CHECKING, Any

from aretry.engine.outcome import AttemptOutcome, Failure, Success, TimedOut

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger: logging.Logger = logging.getLogger(__name__)


def _call(operation: Callable[[], Any]) -> AttemptOutcome:
    try:
        return Success(operation())
    except Exception as exc:  # noqa: BLE001
        return Failure(exc)


class TimeoutGuard:
    """Run a synchronous operation with an optional deadline.

    Args:
        timeout: The per-attempt timeout in seconds. 0 disables the
            deadline and the operation runs on the calling thread.

    Example:
        ```pycon
        >>> from aretry.engine.timeout import TimeoutGuard
        >>> TimeoutGuard(timeout=0).run(lambda: 42)
        Success(value=42)
        >>> TimeoutGuard(timeout=1.0).run(lambda: 42)
        Success(value=42)

        ```
    """

    def __init__(self, timeout: float = 0.0) -> None:
        self.timeout = timeout

    def run(self, operation: Callable[[], Any], attempt: int = 1) -> AttemptOutcome:
        """Run one attempt of the operation.

        Args:
            operation: The zero-argument operation.
            attempt: The attempt index (1-indexed), used to name the
                worker thread.

        Returns:
            ``Success`` with the returned value, ``Failure`` with the
            raised exception, or ``TimedOut`` if the deadline was hit.

        Raises:
            BaseException: Exceptions that are not ``Exception``
                instances (e.g. ``KeyboardInterrupt``) propagate.
        """
        if self.timeout <= 0:
            return _call(operation)

        results: list[AttemptOutcome | BaseException] = []
        context = contextvars.copy_context()

        def target() -> None:
            try:
                results.append(context.run(_call, operation))
            except BaseException as exc:  # noqa: BLE001
                results.append(exc)

        worker = threading.Thread(target=target, name=f"aretry-attempt-{attempt}", daemon=True)
        worker.start()
        worker.join(self.timeout)
        if worker.is_alive():
            logger.debug(
                f"Attempt {attempt} did not complete within {self.timeout}s, "
                f"abandoning worker thread {worker.name}"
            )
            return TimedOut(self.timeout)

        outcome = results[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class AsyncTimeoutGuard:
    """Run a coroutine function with an optional deadline.

    The coroutine runs as an ``asyncio.Task``; if it has not completed
    when the deadline elapses, the task is cancelled and awaited until it
    has unwound, so the next attempt never overlaps its cleanup.

    Args:
        timeout: The per-attempt timeout in seconds. 0 disables the
            deadline and the coroutine is awaited directly.
    """

    def __init__(self, timeout: float = 0.0) -> None:
        self.timeout = timeout

    async def run(
        self, operation: Callable[[], Awaitable[Any]], attempt: int = 1
    ) -> AttemptOutcome:
        """Run one attempt of the coroutine function.

        Args:
            operation: The zero-argument coroutine function.
            attempt: The attempt index (1-indexed), used for logging.

        Returns:
            ``Success``, ``Failure`` or ``TimedOut``.
        """
        if self.timeout <= 0:
            try:
                return Success(await operation())
            except Exception as exc:  # noqa: BLE001
                return Failure(exc)

        try:
            awaitable = operation()
        except Exception as exc:  # noqa: BLE001
            return Failure(exc)

        task = asyncio.ensure_future(awaitable)
        try:
            done, _ = await asyncio.wait({task}, timeout=self.timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        if not done:
            logger.debug(f"Attempt {attempt} did not complete within {self.timeout}s, cancelling")
            task.cancel()
            # Wait for the cancelled attempt to unwind before the next one starts
            await asyncio.wait({task})
            if not task.cancelled() and task.exception() is not None:
                logger.debug(
                    f"Cancelled attempt {attempt} raised {type(task.exception()).__name__} "
                    "while unwinding"
                )
            return TimedOut(self.timeout)

        try:
            return Success(task.result())
        except Exception as exc:  # noqa: BLE001
            return Failure(exc)
