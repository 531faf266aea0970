r"""Request surfaces composed under ``ExchangeClient``."""

from __future__ import annotations

__all__ = ["ApiKeyPrivateClient", "BaseSubClient", "PrivateClient", "PublicClient"]

from aresdex.modules.api_key_private import ApiKeyPrivateClient
from aresdex.modules.base import BaseSubClient
from aresdex.modules.private import PrivateClient
from aresdex.modules.public import PublicClient
