r"""Request envelope and single-attempt response outcomes."""

from __future__ import annotations

__all__ = [
    "Failure",
    "HttpMethod",
    "RequestSpec",
    "ResponseOutcome",
    "Success",
    "encode_body",
    "query_params",
]

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union
from urllib.parse import urlencode

if TYPE_CHECKING:
    from collections.abc import Callable

    from aresdex.exceptions import ErrorKind


class HttpMethod(str, Enum):
    """HTTP verbs understood by the request dispatcher."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


def encode_body(body: Any) -> str | None:
    """Serialize a request body to JSON.

    Args:
        body: The JSON-serializable body, or ``None``.

    Returns:
        The compact JSON text, or ``None`` if there is no body to send:
        either ``body`` is ``None`` or it serializes to ``{}``.

    Example:
        ```pycon
        >>> from aresdex.request import encode_body
        >>> encode_body({}) is None
        True
        >>> encode_body({"market": "BTC-USD"})
        '{"market":"BTC-USD"}'

        ```
    """
    if body is None:
        return None
    text = json.dumps(body, separators=(",", ":"))
    if text == "{}":
        return None
    return text


def query_params(*pairs: tuple[str, Any]) -> tuple[tuple[str, str], ...]:
    """Build ordered query parameters, skipping the ``None`` values.

    Values are always sent as strings; booleans are lower-cased.

    Example:
        ```pycon
        >>> from aresdex.request import query_params
        >>> query_params(("ticker", "BTC-USD"), ("limit", 10), ("status", None), ("latest", True))
        (('ticker', 'BTC-USD'), ('limit', '10'), ('latest', 'true'))

        ```
    """
    params = []
    for key, value in pairs:
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        params.append((key, str(value)))
    return tuple(params)


@dataclass(frozen=True)
class RequestSpec:
    """Description of one logical request.

    Attributes:
        method: The HTTP verb. Anything that is not a ``HttpMethod``
            member is sent as GET.
        path: The path relative to the host and version prefix.
        params: The ordered ``(key, value)`` query parameters.
            Duplicated keys are kept in order.
        body: The optional JSON-serializable body.
        decoder: Optional callable applied to the decoded JSON payload
            to check and convert it into the expected shape. It should
            raise ``ValueError``, ``KeyError`` or ``TypeError`` when the
            payload does not match.
    """

    method: HttpMethod | str
    path: str
    params: tuple[tuple[str, str], ...] = ()
    body: Any = None
    decoder: Callable[[Any], Any] | None = field(default=None, compare=False)

    def has_body(self) -> bool:
        """Indicate if a body is attached to the outgoing request."""
        return encode_body(self.body) is not None

    def path_with_query(self) -> str:
        r"""Return the path followed by its encoded query string, as
        used when signing requests."""
        if not self.params:
            return self.path
        return f"{self.path}?{urlencode(self.params)}"


@dataclass(frozen=True)
class Success:
    """Successful attempt.

    Attributes:
        status_code: The HTTP status code (200 or 201).
        payload: The decoded payload.
    """

    status_code: int
    payload: Any


@dataclass(frozen=True)
class Failure:
    """Failed attempt.

    Attributes:
        kind: The kind of failure.
        code: The textual HTTP status code, or an empty string if no
            response was received.
        message: The response body text or the error description.
    """

    kind: ErrorKind
    code: str
    message: str


ResponseOutcome = Union[Success, Failure]
