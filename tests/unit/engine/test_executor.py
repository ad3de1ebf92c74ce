r"""Unit tests for the synchronous retry executor."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING
from unittest.mock import Mock, call

import pytest

from aretry.engine.executor import RetryExecutor
from aretry.engine.manager import CallbackManager
from aretry.engine.matcher import FailureMatcher
from aretry.engine.strategy import IntervalCalculator
from aretry.engine.timeout import TimeoutGuard
from aretry.exceptions import AttemptTimeoutError
from aretry.policy import build_policy

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def release() -> Generator[threading.Event, None, None]:
    """Unblock the abandoned worker threads at the end of the test."""
    event = threading.Event()
    yield event
    event.set()


def test_retry_executor_init() -> None:
    """Test RetryExecutor initialization."""
    policy = build_policy(tries=4, interval=1.0, timeout=2.0)
    executor = RetryExecutor(policy)

    assert executor.policy is policy
    assert isinstance(executor.guard, TimeoutGuard)
    assert executor.guard.timeout == 2.0
    assert isinstance(executor.matcher, FailureMatcher)
    assert isinstance(executor.strategy, IntervalCalculator)
    assert isinstance(executor.callbacks, CallbackManager)


def test_retry_executor_success_first_attempt(mock_sleep: Mock) -> None:
    """Test success on the first attempt."""
    operation = Mock(return_value="ok")

    assert RetryExecutor(build_policy(tries=3)).execute(operation) == "ok"
    operation.assert_called_once_with()
    mock_sleep.assert_not_called()


@pytest.mark.parametrize("tries", [1, 2, 3, 5])
def test_retry_executor_always_failing_runs_tries_times(mock_sleep: Mock, tries: int) -> None:
    """Test that a failing operation runs tries times."""
    error = OSError("disk full")
    operation = Mock(side_effect=error)

    with pytest.raises(OSError, match=r"disk full") as exc_info:
        RetryExecutor(build_policy(tries=tries)).execute(operation)

    assert exc_info.value is error
    assert operation.call_count == tries


def test_retry_executor_success_after_failures(mock_sleep: Mock) -> None:
    """Test success after retryable failures."""
    operation = Mock(side_effect=[OSError("flaky"), OSError("flaky"), "done"])

    assert RetryExecutor(build_policy(tries=5)).execute(operation) == "done"
    assert operation.call_count == 3


def test_retry_executor_non_matching_failure_not_retried(mock_sleep: Mock) -> None:
    """Test that a non-matching failure is not retried."""
    operation = Mock(side_effect=KeyError("missing"))

    with pytest.raises(KeyError, match=r"missing"):
        RetryExecutor(build_policy(tries=5, on=OSError)).execute(operation)

    operation.assert_called_once_with()
    mock_sleep.assert_not_called()


def test_retry_executor_fatal_failure_not_retried(mock_sleep: Mock) -> None:
    """Test that a fatal failure is never retried."""
    operation = Mock(side_effect=NotImplementedError("todo"))

    with pytest.raises(NotImplementedError, match=r"todo"):
        RetryExecutor(build_policy(tries=5, on=[Exception, NotImplementedError])).execute(
            operation
        )

    operation.assert_called_once_with()


def test_retry_executor_base_exception_propagates(mock_sleep: Mock) -> None:
    """Test that KeyboardInterrupt propagates at once."""
    operation = Mock(side_effect=KeyboardInterrupt)

    with pytest.raises(KeyboardInterrupt):
        RetryExecutor(build_policy(tries=5, on=BaseException)).execute(operation)

    operation.assert_called_once_with()


def test_retry_executor_pattern(mock_sleep: Mock) -> None:
    """Test retrying only failures matching a pattern."""
    operation = Mock(side_effect=[RuntimeError("HTTP 503"), RuntimeError("bad request"), "ok"])

    with pytest.raises(RuntimeError, match=r"bad request"):
        RetryExecutor(build_policy(tries=5, on=(RuntimeError, r"HTTP"))).execute(operation)

    assert operation.call_count == 2


def test_retry_executor_on_return(mock_sleep: Mock) -> None:
    """Test that the last rejected result is returned."""
    operation = Mock(side_effect=[1, 2, 3])
    policy = build_policy(tries=3, on_return=lambda value, attempt: value < 10)

    assert RetryExecutor(policy).execute(operation) == 3
    assert operation.call_count == 3


def test_retry_executor_on_return_accepted(mock_sleep: Mock) -> None:
    """Test that an accepted result stops retrying."""
    operation = Mock(side_effect=[1, 20, 3])
    policy = build_policy(tries=3, on_return=lambda value, attempt: value < 10)

    assert RetryExecutor(policy).execute(operation) == 20
    assert operation.call_count == 2


def test_retry_executor_on_return_receives_attempt(mock_sleep: Mock) -> None:
    """Test the arguments of the result predicate."""
    predicate = Mock(side_effect=[True, False])

    RetryExecutor(build_policy(tries=3, on_return=predicate)).execute(lambda: "value")
    assert predicate.call_args_list == [call("value", 1), call("value", 2)]


def test_retry_executor_interval_callable(mock_sleep: Mock) -> None:
    """Test delays computed by a callable interval."""
    operation = Mock(side_effect=OSError("disk full"))
    policy = build_policy(tries=4, interval=lambda n: (2**n - 1) / 2)

    with pytest.raises(OSError, match=r"disk full"):
        RetryExecutor(policy).execute(operation)

    assert mock_sleep.call_args_list == [call(0.5), call(1.5), call(3.5)]


def test_retry_executor_interval_constant(mock_sleep: Mock) -> None:
    """Test delays with a constant interval."""
    operation = Mock(side_effect=[OSError("flaky"), OSError("flaky"), "ok"])

    RetryExecutor(build_policy(tries=3, interval=2.0)).execute(operation)
    assert mock_sleep.call_args_list == [call(2.0), call(2.0)]


def test_retry_executor_interval_zero_does_not_sleep(mock_sleep: Mock) -> None:
    """Test that a zero interval does not sleep."""
    operation = Mock(side_effect=[OSError("flaky"), "ok"])

    RetryExecutor(build_policy(tries=3)).execute(operation)
    mock_sleep.assert_not_called()


def test_retry_executor_on_retry(mock_sleep: Mock, mock_callback: Mock) -> None:
    """Test the arguments of the on_retry callback."""
    errors = [OSError("first"), OSError("second"), OSError("third")]
    operation = Mock(side_effect=errors)

    with pytest.raises(OSError, match=r"third"):
        RetryExecutor(build_policy(tries=3, on_retry=mock_callback)).execute(operation)

    assert mock_callback.call_args_list == [call(errors[0], 1), call(errors[1], 2)]


def test_retry_executor_on_retry_result_rejected(mock_sleep: Mock, mock_callback: Mock) -> None:
    """Test on_retry after a rejected result."""
    policy = build_policy(tries=2, on_return=lambda value, attempt: True, on_retry=mock_callback)

    RetryExecutor(policy).execute(lambda: "value")
    mock_callback.assert_called_once_with(None, 1)


def test_retry_executor_on_retry_called_before_sleep(mock_sleep: Mock) -> None:
    """Test that on_retry runs before sleeping."""
    events = []
    mock_sleep.side_effect = lambda delay: events.append("sleep")
    policy = build_policy(
        tries=2, interval=1.0, on_retry=lambda error, attempt: events.append("on_retry")
    )

    RetryExecutor(policy).execute(Mock(side_effect=[OSError("flaky"), "ok"]))
    assert events == ["on_retry", "sleep"]


def test_retry_executor_on_retry_error_propagates(mock_sleep: Mock) -> None:
    """Test that on_retry errors propagate."""
    operation = Mock(side_effect=OSError("disk full"))
    callback = Mock(side_effect=RuntimeError("observer bug"))

    with pytest.raises(RuntimeError, match=r"observer bug"):
        RetryExecutor(build_policy(tries=3, on_retry=callback)).execute(operation)

    operation.assert_called_once_with()


def test_retry_executor_not_called_on_success(mock_sleep: Mock, mock_callback: Mock) -> None:
    """Test that on_retry is not called on success."""
    RetryExecutor(build_policy(tries=3, on_retry=mock_callback)).execute(lambda: 1)
    mock_callback.assert_not_called()


def test_retry_executor_timeout_retried(
    mock_sleep: Mock, mock_callback: Mock, release: threading.Event
) -> None:
    """Test that timed out attempts are retried."""
    policy = build_policy(tries=2, timeout=0.05, on=KeyError, on_retry=mock_callback)

    with pytest.raises(AttemptTimeoutError, match=r"attempt 2 timed out after 0.05 seconds"):
        RetryExecutor(policy).execute(release.wait)

    assert mock_callback.call_count == 1
    error, attempt = mock_callback.call_args.args
    assert isinstance(error, AttemptTimeoutError)
    assert attempt == 1


def test_retry_executor_timeout_then_success(mock_sleep: Mock, release: threading.Event) -> None:
    """Test success after a timed out attempt."""
    outcomes = iter([release.wait, lambda: "ok"])

    result = RetryExecutor(build_policy(tries=3, timeout=0.05)).execute(
        lambda: next(outcomes)()
    )
    assert result == "ok"


def test_retry_executor_timeout_opt_out(mock_sleep: Mock, release: threading.Event) -> None:
    """Test timeouts with retry_on_timeout=False."""
    operation = Mock(side_effect=release.wait)
    policy = build_policy(tries=3, timeout=0.05, on=KeyError, retry_on_timeout=False)

    with pytest.raises(AttemptTimeoutError):
        RetryExecutor(policy).execute(operation)

    operation.assert_called_once_with()


def test_retry_executor_timeout_is_timeout_error(
    mock_sleep: Mock, release: threading.Event
) -> None:
    """Test that the timeout error is a TimeoutError."""
    with pytest.raises(TimeoutError):
        RetryExecutor(build_policy(tries=1, timeout=0.05)).execute(release.wait)
