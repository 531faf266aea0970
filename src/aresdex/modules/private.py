r"""Address and subaccount endpoints of the indexer API, plus order
submission through the internal host."""

from __future__ import annotations

__all__ = ["PrivateClient"]

from typing import TYPE_CHECKING, Any

from aresdex.config import API_V4_PREFIX
from aresdex.core import Surface
from aresdex.decoders import json_list, json_object
from aresdex.modules.base import BaseSubClient
from aresdex.request import HttpMethod, RequestSpec, query_params

if TYPE_CHECKING:
    from collections.abc import Mapping

    import httpx

    from aresdex.core import ClientConfig
    from aresdex.credentials import AddressCredentials


class PrivateClient(BaseSubClient):
    r"""Account endpoints of one address and subaccount.

    Queries retry according to the private backoff registry. Order
    creation and cancellation go to the internal host and are sent
    exactly once, whatever the registry says.

    Args:
        config: The shared configuration.
        credentials: The address and subaccount number.
        transport: Optional httpx transport.
    """

    surface = Surface.PRIVATE
    prefix = API_V4_PREFIX

    def __init__(
        self,
        config: ClientConfig,
        credentials: AddressCredentials,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(config, transport=transport)
        self.credentials = credentials

    @property
    def address(self) -> str:
        return self.credentials.address

    @property
    def subaccount_number(self) -> str:
        return str(self.credentials.subaccount_number)

    def _subaccount_params(self, *pairs: tuple[str, Any]) -> tuple[tuple[str, str], ...]:
        return query_params(
            ("address", self.address), ("subaccountNumber", self.subaccount_number), *pairs
        )

    async def get_account(self) -> dict[str, Any]:
        return await self.request(
            "get_account",
            RequestSpec(
                HttpMethod.GET,
                f"addresses/{self.address}/subaccountNumber/{self.subaccount_number}",
                decoder=json_object("subaccount"),
            ),
        )

    async def get_positions(
        self,
        market: str | None = None,
        status: str | None = None,
        limit: int | None = None,
        created_before_or_at_height: int | None = None,
        created_before_or_at: str | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_positions",
            RequestSpec(
                HttpMethod.GET,
                "perpetualPositions",
                params=self._subaccount_params(
                    ("market", market),
                    ("status", status),
                    ("limit", limit),
                    ("createdBeforeOrAtHeight", created_before_or_at_height),
                    ("createdBeforeOrAt", created_before_or_at),
                ),
                decoder=json_object("positions"),
            ),
        )

    async def get_asset_positions(self) -> dict[str, Any]:
        return await self.request(
            "get_asset_positions",
            RequestSpec(
                HttpMethod.GET,
                "assetPositions",
                params=self._subaccount_params(),
                decoder=json_object("positions"),
            ),
        )

    async def get_orders(
        self,
        ticker: str | None = None,
        status: str | None = None,
        side: str | None = None,
        order_type: str | None = None,
        limit: int | None = None,
        good_til_block_before_or_at: int | None = None,
        good_til_block_time_before_or_at: str | None = None,
        return_latest_orders: bool | None = None,
    ) -> list[Any]:
        """List the orders of the subaccount.

        Args:
            ticker: Optional market ticker.
            status: Optional order status (e.g. ``"OPEN"``).
            side: Optional side (``"BUY"`` or ``"SELL"``).
            order_type: Optional order type (e.g. ``"LIMIT"``).
            limit: Optional maximum number of orders.
            good_til_block_before_or_at: Optional block height bound.
            good_til_block_time_before_or_at: Optional ISO time bound.
            return_latest_orders: Whether to return the latest orders
                first.

        Returns:
            The orders.
        """
        return await self.request(
            "get_orders",
            RequestSpec(
                HttpMethod.GET,
                "orders",
                params=self._subaccount_params(
                    ("ticker", ticker),
                    ("status", status),
                    ("side", side),
                    ("type", order_type),
                    ("limit", limit),
                    ("goodTilBlockBeforeOrAt", good_til_block_before_or_at),
                    ("goodTilBlockTimeBeforeOrAt", good_til_block_time_before_or_at),
                    ("returnLatestOrders", return_latest_orders),
                ),
                decoder=json_list,
            ),
        )

    async def get_order_by_id(self, order_id: str) -> dict[str, Any]:
        return await self.request(
            "get_order_by_id",
            RequestSpec(HttpMethod.GET, f"orders/{order_id}", decoder=json_object("id")),
        )

    async def get_fills(
        self,
        market: str | None = None,
        market_type: str | None = None,
        limit: int | None = None,
        created_before_or_at_height: int | None = None,
        created_before_or_at: str | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_fills",
            RequestSpec(
                HttpMethod.GET,
                "fills",
                params=self._subaccount_params(
                    ("market", market),
                    ("marketType", market_type),
                    ("limit", limit),
                    ("createdBeforeOrAtHeight", created_before_or_at_height),
                    ("createdBeforeOrAt", created_before_or_at),
                ),
                decoder=json_object("fills"),
            ),
        )

    async def get_transfers(
        self,
        limit: int | None = None,
        created_before_or_at_height: int | None = None,
        created_before_or_at: str | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_transfers",
            RequestSpec(
                HttpMethod.GET,
                "transfers",
                params=self._subaccount_params(
                    ("limit", limit),
                    ("createdBeforeOrAtHeight", created_before_or_at_height),
                    ("createdBeforeOrAt", created_before_or_at),
                ),
                decoder=json_object("transfers"),
            ),
        )

    async def get_historical_pnl(
        self,
        limit: int | None = None,
        created_before_or_at_height: int | None = None,
        created_before_or_at: str | None = None,
        created_on_or_after_height: int | None = None,
        created_on_or_after: str | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_historical_pnl",
            RequestSpec(
                HttpMethod.GET,
                "historical-pnl",
                params=self._subaccount_params(
                    ("limit", limit),
                    ("createdBeforeOrAtHeight", created_before_or_at_height),
                    ("createdBeforeOrAt", created_before_or_at),
                    ("createdOnOrAfterHeight", created_on_or_after_height),
                    ("createdOnOrAfter", created_on_or_after),
                ),
                decoder=json_object("historicalPnl"),
            ),
        )

    async def create_order(self, order_params: Mapping[str, Any]) -> dict[str, Any]:
        """Submit an order through the internal host.

        The order is sent exactly once.

        Args:
            order_params: The JSON order parameters.

        Returns:
            The internal API response.
        """
        return await self._internal_request(
            "create_order",
            RequestSpec(HttpMethod.POST, "orders", body=dict(order_params), decoder=json_object()),
        )

    async def cancel_order(
        self, market: str, client_id: str, good_til_block_time: int
    ) -> dict[str, Any]:
        """Cancel an order through the internal host.

        The cancellation is sent exactly once.
        """
        return await self._internal_request(
            "cancel_order",
            RequestSpec(
                HttpMethod.DELETE,
                "cancel_order",
                body={
                    "market": market,
                    "client_id": client_id,
                    "good_til_block_time": good_til_block_time,
                },
                decoder=json_object(),
            ),
        )
