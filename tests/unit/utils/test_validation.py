r"""Unit tests for retry parameter validation."""

from __future__ import annotations

import pytest

from aretry.exceptions import InvalidPolicyError
from aretry.utils import validate_retry_params


def test_validate_retry_params_valid() -> None:
    """Test validation with valid parameters."""
    validate_retry_params(tries=1)
    validate_retry_params(tries=3, interval=0.0, timeout=0.0)
    validate_retry_params(tries=5, interval=2, timeout=1.5)


def test_validate_retry_params_callable_interval() -> None:
    """Test validation with a callable interval."""
    validate_retry_params(tries=3, interval=lambda attempt: -attempt)


def test_validate_retry_params_callbacks() -> None:
    """Test validation with callable callbacks."""
    validate_retry_params(
        tries=3,
        on_return=lambda value, attempt: False,
        on_retry=lambda error, attempt: None,
    )


@pytest.mark.parametrize("tries", [0, -1, -10])
def test_validate_retry_params_tries_too_small(tries: int) -> None:
    """Test that tries below 1 is rejected."""
    with pytest.raises(InvalidPolicyError, match=r"tries must be >= 1"):
        validate_retry_params(tries=tries)


@pytest.mark.parametrize("tries", [1.5, "3", None, True])
def test_validate_retry_params_tries_not_integer(tries: object) -> None:
    """Test that a non-integer tries is rejected."""
    with pytest.raises(InvalidPolicyError, match=r"tries must be an integer"):
        validate_retry_params(tries=tries)


def test_validate_retry_params_negative_interval() -> None:
    """Test that a negative interval is rejected."""
    with pytest.raises(InvalidPolicyError, match=r"interval must be >= 0, got -0.5"):
        validate_retry_params(tries=3, interval=-0.5)


def test_validate_retry_params_invalid_interval_type() -> None:
    """Test that an invalid interval type is rejected."""
    with pytest.raises(InvalidPolicyError, match=r"interval must be a number or a callable"):
        validate_retry_params(tries=3, interval="1s")


def test_validate_retry_params_negative_timeout() -> None:
    """Test that a negative timeout is rejected."""
    with pytest.raises(InvalidPolicyError, match=r"timeout must be >= 0, got -1"):
        validate_retry_params(tries=3, timeout=-1)


def test_validate_retry_params_invalid_timeout_type() -> None:
    """Test that an invalid timeout type is rejected."""
    with pytest.raises(InvalidPolicyError, match=r"timeout must be a number"):
        validate_retry_params(tries=3, timeout=None)


@pytest.mark.parametrize("name", ["on_return", "on_retry"])
def test_validate_retry_params_callback_not_callable(name: str) -> None:
    """Test that non-callable callbacks are rejected."""
    with pytest.raises(InvalidPolicyError, match=rf"{name} must be callable"):
        validate_retry_params(tries=3, **{name: 42})


def test_invalid_policy_error_is_value_error() -> None:
    """Test that InvalidPolicyError is a ValueError."""
    with pytest.raises(ValueError, match=r"tries must be >= 1"):
        validate_retry_params(tries=0)
