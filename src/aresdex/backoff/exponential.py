r"""Exponential backoff arithmetic shared by every backoff policy."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from aresdex.utils.validation import validate_backoff_params


class ExponentialBackoff:
    """Exponential backoff clamped between a minimum and a maximum
    delay.

    Calculates delay as: min_delay * (factor ** attempt), clamped to
    the ``[min_delay, max_delay]`` interval.

    Args:
        factor: The growth factor between two consecutive delays.
            Must be >= 1 so the delay sequence never decreases.
        min_delay: The delay in seconds before the first retry.
        max_delay: The maximum delay in seconds.

    Example:
        ```pycon
        >>> from aresdex.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(factor=2.0, min_delay=0.5, max_delay=3.0)
        >>> backoff.calculate(0)  # First retry
        0.5
        >>> backoff.calculate(1)  # Second retry
        1.0
        >>> backoff.calculate(2)  # Third retry
        2.0
        >>> backoff.calculate(10)  # Would be 512.0, but capped
        3.0

        ```
    """

    def __init__(self, factor: float, min_delay: float, max_delay: float) -> None:
        validate_backoff_params(factor=factor, min_delay=min_delay, max_delay=max_delay)
        self.factor = factor
        self.min_delay = min_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__qualname__}(factor={self.factor}, "
            f"min_delay={self.min_delay}, max_delay={self.max_delay})"
        )

    def calculate(self, attempt: int) -> float:
        """Calculate the backoff delay for a given retry attempt.

        Args:
            attempt: The current attempt number (0-indexed). For example,
                attempt=0 is the first retry, attempt=1 is the second retry, etc.

        Returns:
            The calculated delay in seconds, never below ``min_delay``
            and never above ``max_delay``.
        """
        try:
            delay = self.min_delay * (self.factor**attempt)
        except OverflowError:
            # min_delay * inf: zero stays zero, anything else hits the cap
            return self.min_delay if self.min_delay == 0 else self.max_delay
        return min(max(delay, self.min_delay), self.max_delay)
