r"""Configuration shared by the exchange client and its sub-clients."""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "ClientOptions",
    "Surface",
    "validate_host",
    "validate_network_id",
    "validate_timeout",
]

from aresdex.core.config import ClientConfig, ClientOptions, Surface
from aresdex.core.validation import validate_host, validate_network_id, validate_timeout
