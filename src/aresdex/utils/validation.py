r"""Parameter validation utilities for backoff policies and credentials.

This module provides validation functions to ensure parameters meet the
required constraints before they are used by the retry logic or by the
client composition.
"""

from __future__ import annotations

__all__ = ["validate_backoff_params", "validate_max_attempts", "validate_non_empty"]


def validate_backoff_params(
    factor: float,
    min_delay: float,
    max_delay: float,
    jitter_factor: float = 0.0,
) -> None:
    """Validate exponential backoff parameters.

    Args:
        factor: Growth factor between consecutive delays. Must be >= 1.
        min_delay: Delay in seconds before the first retry. Must be >= 0.
        max_delay: Maximum delay in seconds. Must be >= min_delay.
        jitter_factor: Factor for adding random jitter to delays.
            Must be >= 0.

    Raises:
        ValueError: If any parameter fails validation.

    Example:
        ```pycon
        >>> from aresdex.utils.validation import validate_backoff_params
        >>> validate_backoff_params(factor=2.0, min_delay=0.2, max_delay=10.0)
        >>> validate_backoff_params(factor=0.5, min_delay=0.2, max_delay=10.0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: factor must be >= 1, got 0.5

        ```
    """
    if factor < 1:
        msg = f"factor must be >= 1, got {factor}"
        raise ValueError(msg)
    if min_delay < 0:
        msg = f"min_delay must be >= 0, got {min_delay}"
        raise ValueError(msg)
    if max_delay < min_delay:
        msg = f"max_delay must be >= min_delay ({min_delay}), got {max_delay}"
        raise ValueError(msg)
    if jitter_factor < 0:
        msg = f"jitter_factor must be >= 0, got {jitter_factor}"
        raise ValueError(msg)


def validate_max_attempts(max_attempts: int) -> None:
    """Validate the number of retries allowed after the first attempt.

    Args:
        max_attempts: Number of retries. A value of 0 means exactly one
            attempt and no retry.

    Raises:
        ValueError: If ``max_attempts`` is negative.
    """
    if max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ValueError(msg)


def validate_non_empty(**fields: str) -> None:
    """Validate that every given string field is non-empty.

    Args:
        **fields: The fields to check, keyed by their name.

    Raises:
        ValueError: If a field is empty or only contains whitespace.
    """
    for name, value in fields.items():
        if not isinstance(value, str) or not value.strip():
            msg = f"{name} must be a non-empty string, got {value!r}"
            raise ValueError(msg)
