r"""Top-level exchange client composing the request surfaces.

The client always builds a public sub-client. Authenticated sub-clients
are built only when the matching credentials are supplied: an
``AddressCredentials`` builds the ``private`` surface and an
``ApiKeyCredentials`` builds the ``api_key_private`` surface. Every
sub-client references the same immutable ``ClientConfig``.
"""

from __future__ import annotations

__all__ = ["ExchangeClient", "compose_sub_clients"]

import logging
from typing import TYPE_CHECKING

from aresdex.backoff import (
    FallbackBackoffRegistry,
    NoRetryBackoffRegistry,
    default_backoff_registry,
    exponential_backoff_registry,
    no_retry_backoff_registry,
)
from aresdex.core import ClientConfig, ClientOptions, Surface
from aresdex.credentials import AddressCredentials, ApiKeyCredentials
from aresdex.exceptions import SubClientNotConfiguredError
from aresdex.modules import ApiKeyPrivateClient, PrivateClient, PublicClient

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    import httpx

    from aresdex.modules import BaseSubClient
    from aresdex.signing import RequestSigner

logger: logging.Logger = logging.getLogger(__name__)


def compose_sub_clients(
    config: ClientConfig,
    *,
    signer: RequestSigner | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[Surface, BaseSubClient]:
    """Build the sub-clients allowed by the configured credentials.

    Args:
        config: The shared configuration.
        signer: Optional request signer of the API key surface.
        transport: Optional httpx transport shared by the sub-clients.
            Closing any of them closes it.

    Returns:
        The sub-clients keyed by surface. The public surface is always
        present.

    Raises:
        TypeError: If the credentials are not a supported variant.
    """
    sub_clients: dict[Surface, BaseSubClient] = {
        Surface.PUBLIC: PublicClient(config, transport=transport)
    }
    credentials = config.credentials
    if isinstance(credentials, AddressCredentials):
        sub_clients[Surface.PRIVATE] = PrivateClient(config, credentials, transport=transport)
    elif isinstance(credentials, ApiKeyCredentials):
        sub_clients[Surface.API_KEY_PRIVATE] = ApiKeyPrivateClient(
            config, credentials, signer=signer, transport=transport
        )
    elif credentials is not None:
        msg = (
            "credentials must be None, AddressCredentials or ApiKeyCredentials, "
            f"got {type(credentials).__name__}"
        )
        raise TypeError(msg)
    logger.debug(f"Composed sub-clients for {config.host}: {sorted(s.value for s in sub_clients)}")
    return sub_clients


class ExchangeClient:
    r"""Resilient client of the exchange REST API.

    Args:
        host: Base URL of the API.
        options: Optional settings. If ``None``, ``ClientOptions()`` is
            used: default timeout, no credentials, default exponential
            backoff on every surface and stderr retry notifications.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresdex import AddressCredentials, ClientOptions, ExchangeClient
        >>> async def main():  # doctest: +SKIP
        ...     options = ClientOptions(
        ...         credentials=AddressCredentials("dydx1abc", subaccount_number=0),
        ...         private_backoff_registry=ExchangeClient.no_retry_backoff_registry(),
        ...     )
        ...     async with ExchangeClient("https://indexer.example.com", options) as client:
        ...         markets = await client.public.get_markets()
        ...         account = await client.require_private().get_account()
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, host: str, options: ClientOptions | None = None) -> None:
        options = options if options is not None else ClientOptions()
        self.config = ClientConfig.from_options(host, options)
        self._sub_clients = compose_sub_clients(
            self.config, signer=options.signer, transport=options.transport
        )

    def __repr__(self) -> str:
        surfaces = ", ".join(sorted(s.value for s in self._sub_clients))
        return f"{self.__class__.__qualname__}(host={self.config.host!r}, surfaces=[{surfaces}])"

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the connection pools of every sub-client.

        Every sub-client is closed even if closing one of them fails; the
        first failure is raised once all of them have been closed.
        """
        first_error: Exception | None = None
        for surface, sub_client in self._sub_clients.items():
            try:
                await sub_client.aclose()
            except Exception as exc:
                logger.warning(f"Failed to close the {surface.value} sub-client: {exc}")
                if first_error is None:
                    first_error = exc
        if first_error is not None:
            raise first_error

    @property
    def available_surfaces(self) -> frozenset[Surface]:
        return frozenset(self._sub_clients)

    @property
    def public(self) -> PublicClient:
        return self._sub_clients[Surface.PUBLIC]  # type: ignore[return-value]

    @property
    def private(self) -> PrivateClient | None:
        r"""The address sub-client, or ``None`` without
        ``AddressCredentials``."""
        return self._sub_clients.get(Surface.PRIVATE)  # type: ignore[return-value]

    @property
    def api_key_private(self) -> ApiKeyPrivateClient | None:
        r"""The API key sub-client, or ``None`` without
        ``ApiKeyCredentials``."""
        return self._sub_clients.get(Surface.API_KEY_PRIVATE)  # type: ignore[return-value]

    def get_sub_client(self, surface: Surface) -> BaseSubClient | None:
        r"""Return the sub-client of a surface, or ``None`` if it is not
        configured."""
        return self._sub_clients.get(surface)

    def require(self, surface: Surface) -> BaseSubClient:
        """Return the sub-client of a surface.

        Raises:
            SubClientNotConfiguredError: If the surface is not
                configured.
        """
        sub_client = self._sub_clients.get(surface)
        if sub_client is None:
            raise SubClientNotConfiguredError(surface.value)
        return sub_client

    def require_private(self) -> PrivateClient:
        return self.require(Surface.PRIVATE)  # type: ignore[return-value]

    def require_api_key_private(self) -> ApiKeyPrivateClient:
        return self.require(Surface.API_KEY_PRIVATE)  # type: ignore[return-value]

    @staticmethod
    def default_backoff_registry() -> FallbackBackoffRegistry:
        r"""Return a registry using the default exponential policy."""
        return default_backoff_registry()

    @staticmethod
    def exponential_backoff_registry(
        factor: float,
        min_delay: float,
        max_delay: float,
        max_attempts: int,
    ) -> FallbackBackoffRegistry:
        r"""Return a registry sharing one parameterized exponential
        policy."""
        return exponential_backoff_registry(
            factor=factor, min_delay=min_delay, max_delay=max_delay, max_attempts=max_attempts
        )

    @staticmethod
    def no_retry_backoff_registry() -> NoRetryBackoffRegistry:
        r"""Return a registry making exactly one attempt per call."""
        return no_retry_backoff_registry()
