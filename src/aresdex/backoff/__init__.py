r"""Backoff policies and registries for retry delays.

This package provides the exponential backoff arithmetic, the immutable
``BackoffPolicy`` value, and the registries mapping operation names to
policies.
"""

from __future__ import annotations

__all__ = [
    "NO_RETRY_POLICY",
    "BackoffPolicy",
    "BaseBackoffRegistry",
    "ExponentialBackoff",
    "FallbackBackoffRegistry",
    "NoRetryBackoffRegistry",
    "PerOperationBackoffRegistry",
    "default_backoff_registry",
    "exponential_backoff_registry",
    "no_retry_backoff_registry",
]

from aresdex.backoff.exponential import ExponentialBackoff
from aresdex.backoff.policy import NO_RETRY_POLICY, BackoffPolicy
from aresdex.backoff.registry import (
    BaseBackoffRegistry,
    FallbackBackoffRegistry,
    NoRetryBackoffRegistry,
    PerOperationBackoffRegistry,
    default_backoff_registry,
    exponential_backoff_registry,
    no_retry_backoff_registry,
)
