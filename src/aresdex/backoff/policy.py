r"""Immutable backoff policy governing one retry sequence."""

from __future__ import annotations

__all__ = ["BackoffPolicy", "NO_RETRY_POLICY"]

import random
from dataclasses import dataclass

from aresdex.backoff.exponential import ExponentialBackoff
from aresdex.config import (
    DEFAULT_BACKOFF_FACTOR,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MAX_DELAY,
    DEFAULT_MIN_DELAY,
)
from aresdex.utils.validation import validate_backoff_params, validate_max_attempts


@dataclass(frozen=True)
class BackoffPolicy:
    """Attempt limit and delay growth of a retry sequence.

    The delay before retry ``n`` (0-indexed) is
    ``clamp(min_delay * factor ** n, min_delay, max_delay)``. When
    ``jitter_factor`` is positive, up to ``jitter_factor * delay`` of
    random delay is added and the result is capped at ``max_delay``.

    Args:
        factor: Growth factor between consecutive delays. Must be >= 1.
        min_delay: Delay in seconds before the first retry.
        max_delay: Maximum delay in seconds.
        max_attempts: Number of retries after the first attempt.
            ``0`` means exactly one attempt and no retry.
        jitter_factor: Factor for adding random jitter to delays.
            ``0`` disables jitter.

    Example:
        ```pycon
        >>> from aresdex.backoff import BackoffPolicy
        >>> policy = BackoffPolicy(factor=2.0, min_delay=0.01, max_delay=1.0, max_attempts=3)
        >>> policy.delay(0)
        0.01
        >>> policy.delay(2)
        0.04
        >>> policy.total_attempts
        4

        ```
    """

    factor: float = DEFAULT_BACKOFF_FACTOR
    min_delay: float = DEFAULT_MIN_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    jitter_factor: float = 0.0

    def __post_init__(self) -> None:
        validate_backoff_params(
            factor=self.factor,
            min_delay=self.min_delay,
            max_delay=self.max_delay,
            jitter_factor=self.jitter_factor,
        )
        validate_max_attempts(self.max_attempts)

    @property
    def total_attempts(self) -> int:
        """The total number of attempts, including the first one."""
        return self.max_attempts + 1

    def allows_retry(self, attempt: int) -> bool:
        """Indicate if another attempt may follow the given attempt.

        Args:
            attempt: The attempt that just failed (0-indexed).

        Returns:
            ``True`` if at least one retry remains, otherwise ``False``.
        """
        return attempt < self.max_attempts

    def delay(self, attempt: int) -> float:
        """Compute the delay before the retry following ``attempt``.

        Args:
            attempt: The attempt that just failed (0-indexed).

        Returns:
            The delay in seconds.
        """
        delay = ExponentialBackoff(
            factor=self.factor, min_delay=self.min_delay, max_delay=self.max_delay
        ).calculate(attempt)
        if self.jitter_factor > 0:
            jitter = random.uniform(0, self.jitter_factor) * delay  # noqa: S311
            delay = min(delay + jitter, self.max_delay)
        return delay


# Used for mutating calls where a retry could duplicate a side effect
NO_RETRY_POLICY = BackoffPolicy(max_attempts=0)
