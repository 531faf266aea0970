r"""Shared request plumbing of the sub-clients.

A sub-client owns one ``RequestDispatcher`` (and therefore one
connection pool) and one ``RetryExecutor``, and holds a reference to
the shared ``ClientConfig``.
"""

from __future__ import annotations

__all__ = ["BaseSubClient"]

import logging
from typing import TYPE_CHECKING, Any, ClassVar

from aresdex.backoff import NO_RETRY_POLICY
from aresdex.dispatcher import RequestDispatcher
from aresdex.retry import RetryExecutor

if TYPE_CHECKING:
    import asyncio
    from types import TracebackType
    from typing import Self

    import httpx

    from aresdex.backoff import BackoffPolicy
    from aresdex.core import ClientConfig, Surface
    from aresdex.dispatcher import Authenticator
    from aresdex.request import RequestSpec

logger: logging.Logger = logging.getLogger(__name__)


class BaseSubClient:
    """Base class of the request surfaces.

    Subclasses set ``surface`` (which selects the error handler and the
    backoff registry in the shared configuration) and ``prefix`` (the
    API version prefix of their paths).

    Args:
        config: The configuration shared with the other sub-clients.
        transport: Optional httpx transport.
        authenticator: Optional callable computing the authentication
            headers of each attempt.
    """

    surface: ClassVar[Surface]
    prefix: ClassVar[str | None] = None

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        authenticator: Authenticator | None = None,
    ) -> None:
        self.config = config
        self._dispatcher = RequestDispatcher(
            config.timeout, transport=transport, authenticator=authenticator
        )
        self._executor = RetryExecutor(config.error_handler_for(self.surface))
        logger.debug(f"Created {self!r}")

    def __repr__(self) -> str:
        return f"{self.__class__.__qualname__}(host={self.config.host!r}, prefix={self.prefix!r})"

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
        return self._dispatcher.is_closed

    async def aclose(self) -> None:
        r"""Close the connection pool of the sub-client."""
        await self._dispatcher.aclose()

    def backoff_policy(self, operation_name: str) -> BackoffPolicy:
        r"""Return the backoff policy used for an operation."""
        return self.config.backoff_registry_for(self.surface).resolve(operation_name)

    async def request(
        self,
        operation_name: str,
        request: RequestSpec,
        *,
        policy: BackoffPolicy | None = None,
        cancel_event: asyncio.Event | None = None,
    ) -> Any:
        """Send a request to the versioned API with automatic retry
        logic.

        Args:
            operation_name: The operation name used to resolve the
                backoff policy and label retry notifications.
            request: The request to send.
            policy: Optional policy overriding the registry's one.
            cancel_event: Optional event aborting the retry sequence.

        Returns:
            The decoded payload.

        Raises:
            ExchangeRequestError: If every attempt fails.
            RetryCancelledError: If ``cancel_event`` is set first.
        """
        return await self._executor.execute(
            operation_name,
            lambda: self._dispatcher.send(self.config.host, request, self.prefix),
            policy if policy is not None else self.backoff_policy(operation_name),
            cancel_event,
        )

    async def _request_once(self, operation_name: str, request: RequestSpec) -> Any:
        # Mutating calls: a retry could duplicate the side effect
        return await self.request(operation_name, request, policy=NO_RETRY_POLICY)

    async def _request_status(self, operation_name: str, request: RequestSpec) -> int:
        return await self._executor.execute(
            operation_name,
            lambda: self._dispatcher.send_status(self.config.host, request, self.prefix),
            NO_RETRY_POLICY,
        )

    async def _internal_request(self, operation_name: str, request: RequestSpec) -> Any:
        return await self._executor.execute(
            operation_name,
            lambda: self._dispatcher.send(self.config.internal_host, request),
            NO_RETRY_POLICY,
        )
