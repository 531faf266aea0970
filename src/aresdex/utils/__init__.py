r"""Utility functions shared by the backoff, retry and dispatch
layers."""

from __future__ import annotations

__all__ = ["validate_backoff_params", "validate_max_attempts", "validate_non_empty"]

from aresdex.utils.validation import (
    validate_backoff_params,
    validate_max_attempts,
    validate_non_empty,
)
