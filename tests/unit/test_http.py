r"""Unit tests for the httpx retry helpers."""

from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest

from aretry import retry
from aretry.http import RETRY_STATUS_CODES, TRANSIENT_HTTP_ERRORS, retry_on_status

TEST_URL = "https://api.example.com/data"


def test_retry_status_codes() -> None:
    """Test the default retryable HTTP status codes."""
    assert RETRY_STATUS_CODES == (429, 500, 502, 503, 504)


@pytest.mark.parametrize(
    "error",
    [
        httpx.ConnectTimeout("timeout"),
        httpx.ReadTimeout("timeout"),
        httpx.ConnectError("connection refused"),
        httpx.ReadError("read error"),
        httpx.RemoteProtocolError("server disconnected"),
    ],
)
def test_transient_http_errors(error: httpx.HTTPError) -> None:
    """Test that transport failures are transient."""
    assert isinstance(error, TRANSIENT_HTTP_ERRORS)


def test_transient_http_errors_exclude_status_error() -> None:
    """Test that HTTPStatusError is not transient."""
    request = httpx.Request("GET", TEST_URL)
    error = httpx.HTTPStatusError(
        "not found", request=request, response=httpx.Response(404, request=request)
    )
    assert not isinstance(error, TRANSIENT_HTTP_ERRORS)


#####################################
#     Tests for retry_on_status     #
#####################################


@pytest.mark.parametrize("status_code", RETRY_STATUS_CODES)
def test_retry_on_status_retryable(status_code: int) -> None:
    """Test that retryable statuses trigger a retry."""
    assert retry_on_status()(httpx.Response(status_code), 1)


@pytest.mark.parametrize("status_code", [200, 201, 204, 301, 400, 404])
def test_retry_on_status_not_retryable(status_code: int) -> None:
    """Test that other statuses are accepted."""
    assert not retry_on_status()(httpx.Response(status_code), 1)


def test_retry_on_status_custom_forcelist() -> None:
    """Test retry_on_status with a custom forcelist."""
    predicate = retry_on_status([404])
    assert predicate(httpx.Response(404), 1)
    assert not predicate(httpx.Response(503), 1)


def test_retry_on_status_without_status_code() -> None:
    """Test that values without status_code are accepted."""
    assert not retry_on_status()("not a response", 1)


def test_retry_on_status_with_retry(mock_sleep: Mock) -> None:
    """Test retrying an httpx client call on 503 until it succeeds."""
    responses = [httpx.Response(503), httpx.Response(503), httpx.Response(200, json={"ok": 1})]
    send = Mock(side_effect=responses)

    response = retry(send, tries=5, on=TRANSIENT_HTTP_ERRORS, on_return=retry_on_status())
    assert response.status_code == 200
    assert send.call_count == 3


def test_retry_with_mock_transport(mock_sleep: Mock) -> None:
    """Test retrying a real httpx client against a flaky transport."""
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            msg = "connection refused"
            raise httpx.ConnectError(msg, request=request)
        if len(calls) == 2:
            return httpx.Response(502)
        return httpx.Response(200, json={"value": 42})

    with httpx.Client(transport=httpx.MockTransport(handler)) as client:
        response = retry(
            lambda: client.get(TEST_URL),
            tries=3,
            on=TRANSIENT_HTTP_ERRORS,
            on_return=retry_on_status(),
        )

    assert response.json() == {"value": 42}
    assert len(calls) == 3


def test_retry_http_non_transient_error_not_retried(mock_sleep: Mock) -> None:
    """Test that non-transient httpx errors are not retried."""
    send = Mock(side_effect=httpx.UnsupportedProtocol("unsupported"))

    with pytest.raises(httpx.UnsupportedProtocol):
        retry(send, tries=3, on=TRANSIENT_HTTP_ERRORS)

    send.assert_called_once_with()
