r"""Retry execution for exchange API calls."""

from __future__ import annotations

__all__ = ["RetryExecutor"]

from aresdex.retry.executor import RetryExecutor
