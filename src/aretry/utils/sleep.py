r"""Sleeping helpers used between retry attempts."""

from __future__ import annotations

__all__ = ["async_sleep_for", "sleep_for"]

import asyncio
import logging
import time

logger: logging.Logger = logging.getLogger(__name__)


def sleep_for(delay: float) -> None:
    """Block the calling thread for ``delay`` seconds.

    Non-positive delays return immediately without calling
    ``time.sleep``.

    Args:
        delay: The delay in seconds.

    Example:
        ```pycon
        >>> from aretry.utils import sleep_for
        >>> sleep_for(0.0)
        >>> sleep_for(-1.0)

        ```
    """
    if delay <= 0:
        return
    logger.debug(f"Waiting {delay:.2f}s before next attempt")
    time.sleep(delay)


async def async_sleep_for(delay: float) -> None:
    """Suspend the current task for ``delay`` seconds.

    Non-positive delays return immediately without calling
    ``asyncio.sleep``.

    Args:
        delay: The delay in seconds.
    """
    if delay <= 0:
        return
    logger.debug(f"Waiting {delay:.2f}s before next attempt")
    await asyncio.sleep(delay)
