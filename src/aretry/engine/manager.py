r"""Dispatch the retry callback."""

from __future__ import annotations

__all__ = ["CallbackManager"]

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

logger: logging.Logger = logging.getLogger(__name__)


class CallbackManager:
    """Invoke the user-defined ``on_retry`` callback.

    The callback is invoked once per retried attempt, never on the
    final attempt. Exceptions raised by the callback are not caught:
    they propagate to the caller and stop the retry loop.

    Attributes:
        on_retry_callback: Optional callback ``(error_or_none, attempt)``.
    """

    def __init__(
        self, on_retry: Callable[[BaseException | None, int], None] | None = None
    ) -> None:
        self.on_retry_callback = on_retry

    def on_retry(self, error: BaseException | None, attempt: int) -> None:
        """Invoke the ``on_retry`` callback if configured.

        Args:
            error: The failure that triggered the retry, or ``None`` for
                a retry requested by the result predicate.
            attempt: The attempt that just completed (1-indexed).
        """
        if self.on_retry_callback is None:
            return
        logger.debug(f"Invoking on_retry callback for attempt {attempt}")
        self.on_retry_callback(error, attempt)
