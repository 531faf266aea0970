r"""aresdex - Resilient async client for an exchange REST API.

This package provides a public sub-client and optional authenticated
sub-clients, built on top of httpx, whose calls are retried with
per-operation exponential backoff policies.

Key Features:
    - Per-operation backoff policies resolved from a registry
      (fallback, no-retry, or per-operation policies)
    - Single-attempt dispatch with success/failure classification
      (transport, protocol and decode errors)
    - Injectable retry notifications for logging, metrics or alerting
    - Authenticated sub-clients built only when credentials are supplied
    - Full async support with one connection pool per sub-client

Example:
    ```pycon
    >>> import asyncio
    >>> from aresdex import ClientOptions, ExchangeClient
    >>> from aresdex.backoff import BackoffPolicy, PerOperationBackoffRegistry
    >>> registry = PerOperationBackoffRegistry(
    ...     {"get_markets": BackoffPolicy(max_attempts=5)},
    ...     fallback=BackoffPolicy(max_attempts=1),
    ... )
    >>> async def main():  # doctest: +SKIP
    ...     options = ClientOptions(public_backoff_registry=registry)
    ...     async with ExchangeClient("https://indexer.example.com", options) as client:
    ...         return await client.public.get_markets()
    ...
    >>> asyncio.run(main())  # doctest: +SKIP

    ```
"""

from __future__ import annotations

__all__ = [
    "AddressCredentials",
    "ApiKeyCredentials",
    "ClientOptions",
    "ErrorKind",
    "ExchangeClient",
    "ExchangeRequestError",
    "RetryCancelledError",
    "RetryNotification",
    "SigningError",
    "SubClientNotConfiguredError",
    "Surface",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from aresdex.callbacks import RetryNotification
from aresdex.client import ExchangeClient
from aresdex.core import ClientOptions, Surface
from aresdex.credentials import AddressCredentials, ApiKeyCredentials
from aresdex.exceptions import (
    ErrorKind,
    ExchangeRequestError,
    RetryCancelledError,
    SigningError,
    SubClientNotConfiguredError,
)

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
