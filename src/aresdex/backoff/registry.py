r"""Backoff registries resolving an operation name to a backoff policy.

Every registry resolves any name: an operation without a dedicated
policy always gets the registry's fallback policy.
"""

from __future__ import annotations

__all__ = [
    "BaseBackoffRegistry",
    "FallbackBackoffRegistry",
    "NoRetryBackoffRegistry",
    "PerOperationBackoffRegistry",
    "default_backoff_registry",
    "exponential_backoff_registry",
    "no_retry_backoff_registry",
]

from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import TYPE_CHECKING

from aresdex.backoff.policy import NO_RETRY_POLICY, BackoffPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping


class BaseBackoffRegistry(ABC):
    """Abstract base class for backoff registries.

    A backoff registry selects the policy that governs the retry
    sequence of a named operation (e.g. ``"get_account"``).
    """

    @abstractmethod
    def resolve(self, operation_name: str) -> BackoffPolicy:
        """Resolve the backoff policy of an operation.

        Args:
            operation_name: The name of the endpoint method.

        Returns:
            The backoff policy to use. Never ``None``.
        """


class FallbackBackoffRegistry(BaseBackoffRegistry):
    """Registry returning one shared policy for every operation.

    Args:
        policy: The shared policy. Defaults to ``BackoffPolicy()``.

    Example:
        ```pycon
        >>> from aresdex.backoff import BackoffPolicy, FallbackBackoffRegistry
        >>> registry = FallbackBackoffRegistry(BackoffPolicy(max_attempts=5))
        >>> registry.resolve("get_markets").max_attempts
        5

        ```
    """

    def __init__(self, policy: BackoffPolicy | None = None) -> None:
        self.policy = policy if policy is not None else BackoffPolicy()

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(policy={self.policy!r})"

    def resolve(self, operation_name: str) -> BackoffPolicy:  # noqa: ARG002
        return self.policy


class NoRetryBackoffRegistry(BaseBackoffRegistry):
    """Registry disabling retries for every operation.

    Example:
        ```pycon
        >>> from aresdex.backoff import NoRetryBackoffRegistry
        >>> NoRetryBackoffRegistry().resolve("create_order").max_attempts
        0

        ```
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}()"

    def resolve(self, operation_name: str) -> BackoffPolicy:  # noqa: ARG002
        return NO_RETRY_POLICY


class PerOperationBackoffRegistry(BaseBackoffRegistry):
    """Registry with a dedicated policy per operation name.

    Args:
        policies: The policies keyed by operation name. The mapping is
            copied, so later changes to it have no effect.
        fallback: The policy of operations missing from ``policies``.
            Defaults to ``BackoffPolicy()``.

    Mutating operations (``create_order``, ``cancel_order``,
    ``cancel_all_orders`` and ``verify_email``) never consult the
    registry: they always make a single attempt, so an entry for one
    of these names has no effect.

    Example:
        ```pycon
        >>> from aresdex.backoff import BackoffPolicy, PerOperationBackoffRegistry
        >>> registry = PerOperationBackoffRegistry(
        ...     {"get_account": BackoffPolicy(max_attempts=5)},
        ...     fallback=BackoffPolicy(max_attempts=1),
        ... )
        >>> registry.resolve("get_account").max_attempts
        5
        >>> registry.resolve("get_orders").max_attempts
        1

        ```
    """

    def __init__(
        self,
        policies: Mapping[str, BackoffPolicy],
        fallback: BackoffPolicy | None = None,
    ) -> None:
        self.policies: Mapping[str, BackoffPolicy] = MappingProxyType(dict(policies))
        self.fallback = fallback if fallback is not None else BackoffPolicy()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(policies={dict(self.policies)!r}, "
            f"fallback={self.fallback!r})"
        )

    def resolve(self, operation_name: str) -> BackoffPolicy:
        return self.policies.get(operation_name, self.fallback)


def default_backoff_registry() -> FallbackBackoffRegistry:
    r"""Return a registry using the default exponential policy for
    every operation."""
    return FallbackBackoffRegistry()


def exponential_backoff_registry(
    factor: float,
    min_delay: float,
    max_delay: float,
    max_attempts: int,
) -> FallbackBackoffRegistry:
    """Return a registry sharing one parameterized exponential policy.

    Args:
        factor: Growth factor between consecutive delays.
        min_delay: Delay in seconds before the first retry.
        max_delay: Maximum delay in seconds.
        max_attempts: Number of retries after the first attempt.

    Returns:
        The registry.
    """
    return FallbackBackoffRegistry(
        BackoffPolicy(
            factor=factor,
            min_delay=min_delay,
            max_delay=max_delay,
            max_attempts=max_attempts,
        )
    )


def no_retry_backoff_registry() -> NoRetryBackoffRegistry:
    r"""Return a registry making exactly one attempt per call."""
    return NoRetryBackoffRegistry()
