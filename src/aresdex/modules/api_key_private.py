r"""Signed endpoints of the ``v3`` API, authenticated with an API
key."""

from __future__ import annotations

__all__ = ["ApiKeyPrivateClient"]

from typing import TYPE_CHECKING, Any

from aresdex.config import API_V3_PREFIX
from aresdex.core import Surface
from aresdex.decoders import json_object
from aresdex.modules.base import BaseSubClient
from aresdex.request import HttpMethod, RequestSpec, query_params
from aresdex.signing import ApiKeyAuthenticator

if TYPE_CHECKING:
    import httpx

    from aresdex.core import ClientConfig
    from aresdex.credentials import ApiKeyCredentials
    from aresdex.signing import RequestSigner


class ApiKeyPrivateClient(BaseSubClient):
    r"""Account endpoints signed with API key credentials.

    Every attempt carries freshly computed signature and identity
    headers. Queries retry according to the private backoff registry;
    cancellations are sent exactly once.

    Args:
        config: The shared configuration.
        credentials: The API key credentials.
        signer: Optional request signer. Defaults to ``ApiKeySigner()``.
        transport: Optional httpx transport.
    """

    surface = Surface.API_KEY_PRIVATE
    prefix = API_V3_PREFIX

    def __init__(
        self,
        config: ClientConfig,
        credentials: ApiKeyCredentials,
        *,
        signer: RequestSigner | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            config,
            transport=transport,
            authenticator=ApiKeyAuthenticator(credentials, signer),
        )
        self.credentials = credentials

    async def get_user(self) -> dict[str, Any]:
        return await self.request(
            "get_user", RequestSpec(HttpMethod.GET, "users", decoder=json_object("user"))
        )

    async def get_accounts(self) -> dict[str, Any]:
        return await self.request(
            "get_accounts",
            RequestSpec(HttpMethod.GET, "accounts", decoder=json_object("accounts")),
        )

    async def get_api_keys(self) -> dict[str, Any]:
        return await self.request(
            "get_api_keys",
            RequestSpec(HttpMethod.GET, "api-keys", decoder=json_object("apiKeys")),
        )

    async def get_positions(
        self,
        market: str | None = None,
        status: str | None = None,
        limit: int | None = None,
        created_before_or_at: str | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_positions",
            RequestSpec(
                HttpMethod.GET,
                "positions",
                params=query_params(
                    ("market", market),
                    ("status", status),
                    ("limit", limit),
                    ("createdBeforeOrAt", created_before_or_at),
                ),
                decoder=json_object("positions"),
            ),
        )

    async def get_orders(
        self,
        market: str | None = None,
        status: str | None = None,
        side: str | None = None,
        order_type: str | None = None,
        limit: int | None = None,
        created_before_or_at: str | None = None,
        return_latest_orders: bool | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_orders",
            RequestSpec(
                HttpMethod.GET,
                "orders",
                params=query_params(
                    ("market", market),
                    ("status", status),
                    ("side", side),
                    ("type", order_type),
                    ("limit", limit),
                    ("createdBeforeOrAt", created_before_or_at),
                    ("returnLatestOrders", return_latest_orders),
                ),
                decoder=json_object("orders"),
            ),
        )

    async def get_order_by_id(self, order_id: str) -> dict[str, Any]:
        return await self.request(
            "get_order_by_id",
            RequestSpec(HttpMethod.GET, f"orders/{order_id}", decoder=json_object("order")),
        )

    async def get_fills(
        self,
        market: str | None = None,
        order_id: str | None = None,
        limit: int | None = None,
        created_before_or_at: str | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_fills",
            RequestSpec(
                HttpMethod.GET,
                "fills",
                params=query_params(
                    ("market", market),
                    ("orderId", order_id),
                    ("limit", limit),
                    ("createdBeforeOrAt", created_before_or_at),
                ),
                decoder=json_object("fills"),
            ),
        )

    async def cancel_order(self, order_id: str) -> dict[str, Any]:
        r"""Cancel one order. The cancellation is sent exactly once."""
        return await self._request_once(
            "cancel_order",
            RequestSpec(
                HttpMethod.DELETE, f"orders/{order_id}", decoder=json_object("cancelOrder")
            ),
        )

    async def cancel_all_orders(self, market: str | None = None) -> dict[str, Any]:
        r"""Cancel every open order, optionally of one market only. The
        cancellation is sent exactly once."""
        return await self._request_once(
            "cancel_all_orders",
            RequestSpec(
                HttpMethod.DELETE,
                "orders",
                params=query_params(("market", market)),
                decoder=json_object("cancelOrders"),
            ),
        )
