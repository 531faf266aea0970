r"""Configuration dataclasses of the exchange client.

``ClientOptions`` is the caller-facing bundle of optional settings.
``ExchangeClient`` turns it into one immutable ``ClientConfig`` that
every sub-client references.
"""

from __future__ import annotations

__all__ = ["ClientConfig", "ClientOptions", "Surface"]

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from aresdex.backoff import BaseBackoffRegistry, FallbackBackoffRegistry
from aresdex.config import DEFAULT_NETWORK_ID, DEFAULT_TIMEOUT
from aresdex.core.validation import validate_host, validate_network_id, validate_timeout

if TYPE_CHECKING:
    import httpx

    from aresdex.callbacks import ErrorHandler
    from aresdex.credentials import Credentials
    from aresdex.signing import RequestSigner


class Surface(str, Enum):
    """Request surfaces composed under one client."""

    PUBLIC = "public"
    PRIVATE = "private"
    API_KEY_PRIVATE = "api_key_private"

    @property
    def is_authenticated(self) -> bool:
        return self is not Surface.PUBLIC


@dataclass
class ClientOptions:
    """Optional settings of an ``ExchangeClient``.

    Args:
        network_id: The network identifier (1 is mainnet).
        timeout: Maximum seconds to wait for each attempt. Must be > 0.
        credentials: ``None``, ``ApiKeyCredentials`` or
            ``AddressCredentials``.
        internal_host: Base URL of the internal order endpoints used by
            the address sub-client. Defaults to the main host.
        public_error_handler: Handler of the public retry notifications.
        private_error_handler: Handler of the authenticated retry
            notifications.
        public_backoff_registry: Backoff registry of the public surface.
            Defaults to ``FallbackBackoffRegistry()``.
        private_backoff_registry: Backoff registry of the authenticated
            surfaces. Defaults to ``FallbackBackoffRegistry()``.
            The registries only govern queries: ``create_order``,
            ``cancel_order``, ``cancel_all_orders`` and ``verify_email``
            always make a single attempt, even if a registry has an entry
            for their name.
        signer: Optional request signer of the API key surface.
        transport: Optional httpx transport shared by every sub-client.
            It is closed with the client, and closing a single
            sub-client closes it for the others too.

    Example:
        ```pycon
        >>> from aresdex.backoff import no_retry_backoff_registry
        >>> from aresdex.core import ClientOptions
        >>> options = ClientOptions(timeout=5.0, private_backoff_registry=no_retry_backoff_registry())
        >>> options.network_id
        1

        ```
    """

    network_id: int = DEFAULT_NETWORK_ID
    timeout: float = DEFAULT_TIMEOUT
    credentials: Credentials = None
    internal_host: str | None = None
    public_error_handler: ErrorHandler | None = None
    private_error_handler: ErrorHandler | None = None
    public_backoff_registry: BaseBackoffRegistry | None = None
    private_backoff_registry: BaseBackoffRegistry | None = None
    signer: RequestSigner | None = None
    transport: httpx.AsyncBaseTransport | None = None


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration shared by every sub-client.

    Sub-clients hold a reference to the same instance and select the
    settings of their surface with ``error_handler_for`` and
    ``backoff_registry_for``.

    Args:
        host: Base URL of the API.
        internal_host: Base URL of the internal endpoints.
        network_id: The network identifier.
        timeout: Maximum seconds to wait for each attempt.
        credentials: The credentials, if any.
        public_error_handler: Handler of the public retry notifications.
        private_error_handler: Handler of the authenticated retry
            notifications.
        public_backoff_registry: Backoff registry of the public surface.
        private_backoff_registry: Backoff registry of the authenticated
            surfaces.
    """

    host: str
    internal_host: str
    network_id: int = DEFAULT_NETWORK_ID
    timeout: float = DEFAULT_TIMEOUT
    credentials: Credentials = field(default=None, repr=False)
    public_error_handler: ErrorHandler | None = None
    private_error_handler: ErrorHandler | None = None
    public_backoff_registry: BaseBackoffRegistry = field(default_factory=FallbackBackoffRegistry)
    private_backoff_registry: BaseBackoffRegistry = field(default_factory=FallbackBackoffRegistry)

    def __post_init__(self) -> None:
        validate_host(self.host)
        validate_host(self.internal_host, name="internal_host")
        validate_network_id(self.network_id)
        validate_timeout(self.timeout)

    @classmethod
    def from_options(cls, host: str, options: ClientOptions) -> ClientConfig:
        """Create a configuration from caller options.

        Args:
            host: Base URL of the API.
            options: The caller options. Unset registries default to
                ``FallbackBackoffRegistry()``; an unset internal host
                defaults to ``host``.

        Returns:
            The configuration.
        """
        return cls(
            host=host,
            internal_host=options.internal_host or host,
            network_id=options.network_id,
            timeout=options.timeout,
            credentials=options.credentials,
            public_error_handler=options.public_error_handler,
            private_error_handler=options.private_error_handler,
            public_backoff_registry=(
                options.public_backoff_registry
                if options.public_backoff_registry is not None
                else FallbackBackoffRegistry()
            ),
            private_backoff_registry=(
                options.private_backoff_registry
                if options.private_backoff_registry is not None
                else FallbackBackoffRegistry()
            ),
        )

    def error_handler_for(self, surface: Surface) -> ErrorHandler | None:
        r"""Return the error handler of a surface."""
        if surface.is_authenticated:
            return self.private_error_handler
        return self.public_error_handler

    def backoff_registry_for(self, surface: Surface) -> BaseBackoffRegistry:
        r"""Return the backoff registry of a surface."""
        if surface.is_authenticated:
            return self.private_backoff_registry
        return self.public_backoff_registry
