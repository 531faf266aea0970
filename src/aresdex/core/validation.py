r"""Parameter validation utilities for the client configuration."""

from __future__ import annotations

__all__ = ["validate_host", "validate_network_id", "validate_timeout"]


def validate_timeout(timeout: float) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for each attempt's response.
            Must be > 0.

    Raises:
        ValueError: If timeout is <= 0.

    Example:
        ```pycon
        >>> from aresdex.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(0)  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_host(host: str, name: str = "host") -> None:
    """Validate that a host is an absolute http(s) URL.

    Raises:
        ValueError: If the host is empty or has no http(s) scheme.
    """
    if not host or not host.startswith(("http://", "https://")):
        msg = f"{name} must be an http(s) URL, got {host!r}"
        raise ValueError(msg)


def validate_network_id(network_id: int) -> None:
    """Validate the network identifier.

    Raises:
        ValueError: If the network identifier is not positive.
    """
    if network_id <= 0:
        msg = f"network_id must be > 0, got {network_id}"
        raise ValueError(msg)
