r"""Single-attempt request dispatcher and response classification.

The dispatcher turns a ``RequestSpec`` into one HTTP call and classifies
the result as a ``Success`` or a ``Failure``. It never retries: retries
are the job of ``RetryExecutor``.
"""

from __future__ import annotations

__all__ = [
    "Authenticator",
    "RequestDispatcher",
    "build_url",
    "classify_response",
    "read_response",
    "resolve_method",
]

import logging
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

import httpx

from aresdex.config import DEFAULT_TIMEOUT, SUCCESS_STATUS_CODES
from aresdex.core.validation import validate_timeout
from aresdex.exceptions import ErrorKind
from aresdex.request import Failure, HttpMethod, RequestSpec, ResponseOutcome, Success, encode_body

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

logger: logging.Logger = logging.getLogger(__name__)

# (method, signed request path including the query string, body text) -> headers
Authenticator = Callable[[str, str, str | None], Mapping[str, str]]


def resolve_method(method: HttpMethod | str) -> HttpMethod:
    """Resolve the HTTP verb of a request.

    Unknown verbs fall back to GET.

    Example:
        ```pycon
        >>> from aresdex.dispatcher import resolve_method
        >>> resolve_method("post")
        <HttpMethod.POST: 'POST'>
        >>> resolve_method("PATCH")
        <HttpMethod.GET: 'GET'>

        ```
    """
    if isinstance(method, HttpMethod):
        return method
    try:
        return HttpMethod(method.upper())
    except ValueError:
        logger.warning(f"Unsupported HTTP method {method!r}, sending the request as GET")
        return HttpMethod.GET


def build_url(host: str, path: str, prefix: str | None = None) -> str:
    """Build the URL of a request.

    Args:
        host: The base URL of the API.
        path: The path of the endpoint.
        prefix: The optional version prefix (e.g. ``"v4"``).

    Returns:
        ``{host}/{prefix}/{path}``, or ``{host}/{path}`` without prefix.

    Example:
        ```pycon
        >>> from aresdex.dispatcher import build_url
        >>> build_url("https://indexer.example.com/", "perpetualMarkets", prefix="v4")
        'https://indexer.example.com/v4/perpetualMarkets'
        >>> build_url("https://internal.example.com", "orders")
        'https://internal.example.com/orders'

        ```
    """
    parts = [host.rstrip("/")]
    if prefix:
        parts.append(prefix.strip("/"))
    parts.append(path.lstrip("/"))
    return "/".join(parts)


def classify_response(
    response: httpx.Response,
    decoder: Callable[[Any], Any] | None = None,
) -> ResponseOutcome:
    """Classify an HTTP response.

    Status 200 and 201 are successes: the body is decoded as JSON and
    passed through ``decoder``. A body that cannot be decoded is a
    ``DECODE_ERROR`` failure. Every other status is a
    ``PROTOCOL_ERROR`` failure carrying the body text, or the read
    error's description if the body cannot be read.

    Args:
        response: The HTTP response.
        decoder: Optional decoder applied to the JSON payload.

    Returns:
        The outcome of the attempt.
    """
    code = str(response.status_code)
    if response.status_code in SUCCESS_STATUS_CODES:
        try:
            payload = response.json()
            if decoder is not None:
                payload = decoder(payload)
        except (ValueError, KeyError, TypeError) as exc:
            logger.debug(f"Undecodable {code} response: {exc}")
            return Failure(kind=ErrorKind.DECODE_ERROR, code=code, message=f"{type(exc).__name__}: {exc}")
        return Success(status_code=response.status_code, payload=payload)

    try:
        message = response.text
    except (httpx.StreamError, LookupError, ValueError) as exc:
        message = str(exc) or type(exc).__name__
    return Failure(kind=ErrorKind.PROTOCOL_ERROR, code=code, message=message)


async def read_response(
    response: httpx.Response,
    decoder: Callable[[Any], Any] | None = None,
) -> ResponseOutcome:
    """Read the body of a streamed response and classify it.

    The status is known before the body is read, so a read failure keeps
    it: on 200 and 201 the failure is a ``DECODE_ERROR``, on any other
    status a ``PROTOCOL_ERROR``. Both carry the read error's description.

    Args:
        response: The streamed HTTP response.
        decoder: Optional decoder applied to the JSON payload.

    Returns:
        The outcome of the attempt.
    """
    code = str(response.status_code)
    try:
        await response.aread()
    except (httpx.RequestError, httpx.StreamError) as exc:
        logger.debug(f"Cannot read the body of a {code} response: {type(exc).__name__}: {exc}")
        kind = (
            ErrorKind.DECODE_ERROR
            if response.status_code in SUCCESS_STATUS_CODES
            else ErrorKind.PROTOCOL_ERROR
        )
        return Failure(kind=kind, code=code, message=str(exc) or type(exc).__name__)
    return classify_response(response, decoder)


class RequestDispatcher:
    r"""Send single HTTP attempts through a pooled ``httpx.AsyncClient``.

    The connection pool is created once and reused by every call; it is
    safe to share between concurrently running requests.

    Args:
        timeout: Maximum seconds to wait for each attempt. Must be > 0.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``).
        authenticator: Optional callable computing the signature and
            identity headers of each attempt. It is called on every
            attempt so signatures carry a fresh timestamp.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresdex.dispatcher import RequestDispatcher
        >>> from aresdex.request import RequestSpec
        >>> async def main():  # doctest: +SKIP
        ...     async with RequestDispatcher(timeout=5.0) as dispatcher:
        ...         return await dispatcher.send(
        ...             "https://indexer.example.com", RequestSpec("GET", "time"), prefix="v4"
        ...         )
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        authenticator: Authenticator | None = None,
    ) -> None:
        validate_timeout(timeout)
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)
        self._authenticator = authenticator

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    @property
    def is_closed(self) -> bool:
        return self._client.is_closed

    async def aclose(self) -> None:
        r"""Close the underlying connection pool."""
        await self._client.aclose()

    async def send(
        self,
        host: str,
        request: RequestSpec,
        prefix: str | None = None,
    ) -> ResponseOutcome:
        """Send one attempt of a request and classify its response.

        Args:
            host: The base URL of the API.
            request: The request to send.
            prefix: The optional version prefix.

        Returns:
            The outcome of the attempt. Network failures are returned as
            ``TRANSPORT_ERROR`` failures, not raised.

        Raises:
            SigningError: If the authenticator cannot sign the request.
        """
        response = await self._send(host, request, prefix)
        if isinstance(response, Failure):
            return response
        try:
            return await read_response(response, request.decoder)
        finally:
            await response.aclose()

    async def send_status(
        self,
        host: str,
        request: RequestSpec,
        prefix: str | None = None,
    ) -> ResponseOutcome:
        """Send one attempt of a request whose only result is its
        status code.

        Any received status is a ``Success`` whose payload is the status
        code; only network failures are failures.
        """
        response = await self._send(host, request, prefix)
        if isinstance(response, Failure):
            return response
        await response.aclose()
        return Success(status_code=response.status_code, payload=response.status_code)

    async def _send(
        self,
        host: str,
        request: RequestSpec,
        prefix: str | None,
    ) -> httpx.Response | Failure:
        # The response is streamed: the caller reads and closes it
        method = resolve_method(request.method)
        url = httpx.URL(build_url(host, request.path, prefix), params=request.params)
        content = encode_body(request.body)
        headers = {"Accept": "application/json"}
        if content is not None:
            headers["Content-Type"] = "application/json"
        if self._authenticator is not None:
            headers.update(self._authenticator(method.value, url.raw_path.decode("ascii"), content))

        logger.debug(f"Sending {method.value} request to {url}")
        try:
            return await self._client.send(
                self._client.build_request(method.value, url, content=content, headers=headers),
                stream=True,
            )
        except httpx.RequestError as exc:
            logger.debug(f"{method.value} request to {url} failed: {type(exc).__name__}: {exc}")
            return Failure(
                kind=ErrorKind.TRANSPORT_ERROR,
                code="",
                message=f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__,
            )
