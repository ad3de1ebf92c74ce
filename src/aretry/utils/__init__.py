r"""Utility functions shared by the retry executors.

This package provides parameter validation, sleeping helpers and the
opt-in structured logging support.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "async_sleep_for",
    "log_structured",
    "sleep_for",
    "validate_retry_params",
]

from aretry.utils.sleep import async_sleep_for, sleep_for
from aretry.utils.structured_logging import StructuredFormatter, log_structured
from aretry.utils.validation import validate_retry_params
