r"""Decoders checking that a successful payload has the expected
shape.

A decoder receives the JSON-decoded payload and returns the value handed
back to the caller. It raises ``ValueError``, ``KeyError`` or
``TypeError`` when the payload does not match, which the dispatcher
reports as a decode error.
"""

from __future__ import annotations

__all__ = ["json_list", "json_object"]

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable


def json_object(*required_keys: str) -> Callable[[Any], dict[str, Any]]:
    """Create a decoder accepting a JSON object with the given keys.

    Args:
        *required_keys: The keys the object must contain.

    Returns:
        The decoder.

    Example:
        ```pycon
        >>> from aresdex.decoders import json_object
        >>> decode = json_object("markets")
        >>> decode({"markets": {}})
        {'markets': {}}
        >>> decode({"orders": []})  # doctest: +SKIP
        Traceback (most recent call last):
        ...
        KeyError: "missing key(s) in response payload: 'markets'"

        ```
    """

    def decode(payload: Any) -> dict[str, Any]:
        if not isinstance(payload, dict):
            msg = f"expected a JSON object, got {type(payload).__name__}"
            raise TypeError(msg)
        missing = [key for key in required_keys if key not in payload]
        if missing:
            msg = "missing key(s) in response payload: " + ", ".join(repr(k) for k in missing)
            raise KeyError(msg)
        return payload

    return decode


def json_list(payload: Any) -> list[Any]:
    r"""Accept a top-level JSON array."""
    if not isinstance(payload, list):
        msg = f"expected a JSON array, got {type(payload).__name__}"
        raise TypeError(msg)
    return payload
