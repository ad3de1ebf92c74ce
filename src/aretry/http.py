r"""Helpers to retry HTTP calls made with httpx.

This module provides ready-made retry options for operations that send
HTTP requests with ``httpx``: the transport failures worth retrying and
a result predicate retrying transient status codes.

Example:
    ```pycon
    >>> import httpx
    >>> from aretry import retry
    >>> from aretry.backoff import ExponentialBackoff
    >>> from aretry.http import TRANSIENT_HTTP_ERRORS, retry_on_status
    >>> with httpx.Client() as client:  # doctest: +SKIP
    ...     response = retry(
    ...         lambda: client.get("https://api.example.com/data"),
    ...         tries=5,
    ...         interval=ExponentialBackoff(base_delay=0.3),
    ...         on=TRANSIENT_HTTP_ERRORS,
    ...         on_return=retry_on_status(),
    ...     )
    ...

    ```
"""

from __future__ import annotations

__all__ = ["RETRY_STATUS_CODES", "TRANSIENT_HTTP_ERRORS", "retry_on_status"]

import logging
from typing import TYPE_CHECKING, Any

import httpx

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

logger: logging.Logger = logging.getLogger(__name__)

# HTTP status codes that should trigger automatic retry
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = (429, 500, 502, 503, 504)

# httpx failures caused by the network or the remote peer
TRANSIENT_HTTP_ERRORS: tuple[type[httpx.HTTPError], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


def retry_on_status(
    status_forcelist: Iterable[int] = RETRY_STATUS_CODES,
) -> Callable[[Any, int], bool]:
    """Build an ``on_return`` predicate retrying transient HTTP statuses.

    Args:
        status_forcelist: The HTTP status codes that trigger a retry.

    Returns:
        A predicate ``(response, attempt) -> bool`` that returns
        ``True`` when the response status code is in the forcelist.
        Values without a ``status_code`` attribute are accepted.

    Example:
        ```pycon
        >>> import httpx
        >>> from aretry.http import retry_on_status
        >>> predicate = retry_on_status((503,))
        >>> predicate(httpx.Response(503), 1)
        True
        >>> predicate(httpx.Response(200), 1)
        False

        ```
    """
    forcelist = frozenset(status_forcelist)

    def predicate(response: Any, attempt: int) -> bool:
        status_code = getattr(response, "status_code", None)
        if status_code in forcelist:
            logger.debug(f"Attempt {attempt} returned retryable status {status_code}")
            return True
        return False

    return predicate
