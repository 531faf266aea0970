r"""Public (unauthenticated) indexer endpoints."""

from __future__ import annotations

__all__ = ["PublicClient"]

from typing import Any

from aresdex.config import API_V4_PREFIX
from aresdex.core import Surface
from aresdex.decoders import json_object
from aresdex.modules.base import BaseSubClient
from aresdex.request import HttpMethod, RequestSpec, query_params


class PublicClient(BaseSubClient):
    r"""Public market data endpoints of the ``v4`` indexer API.

    Every method retries according to the public backoff registry,
    using its own name as operation name.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aresdex import ExchangeClient
        >>> async def main():  # doctest: +SKIP
        ...     async with ExchangeClient("https://indexer.example.com") as client:
        ...         markets = await client.public.get_markets(ticker="BTC-USD")
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    surface = Surface.PUBLIC
    prefix = API_V4_PREFIX

    async def get_markets(self, ticker: str | None = None, limit: int | None = None) -> dict[str, Any]:
        return await self.request(
            "get_markets",
            RequestSpec(
                HttpMethod.GET,
                "perpetualMarkets",
                params=query_params(("ticker", ticker), ("limit", limit)),
                decoder=json_object("markets"),
            ),
        )

    async def get_orderbook(self, market: str) -> dict[str, Any]:
        return await self.request(
            "get_orderbook",
            RequestSpec(
                HttpMethod.GET,
                f"orderbooks/perpetualMarket/{market}",
                decoder=json_object("bids", "asks"),
            ),
        )

    async def get_trades(
        self,
        market: str,
        created_before_or_at_height: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_trades",
            RequestSpec(
                HttpMethod.GET,
                f"trades/perpetualMarket/{market}",
                params=query_params(
                    ("createdBeforeOrAtHeight", created_before_or_at_height),
                    ("limit", limit),
                ),
                decoder=json_object("trades"),
            ),
        )

    async def get_candles(
        self,
        market: str,
        resolution: str,
        from_iso: str | None = None,
        to_iso: str | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Get the candles of a market.

        Args:
            market: The market ticker (e.g. ``"BTC-USD"``).
            resolution: The candle resolution (e.g. ``"1MIN"``, ``"1HOUR"``).
            from_iso: Optional ISO start time.
            to_iso: Optional ISO end time.
            limit: Optional maximum number of candles.
        """
        return await self.request(
            "get_candles",
            RequestSpec(
                HttpMethod.GET,
                f"candles/perpetualMarkets/{market}",
                params=query_params(
                    ("resolution", resolution),
                    ("fromISO", from_iso),
                    ("toISO", to_iso),
                    ("limit", limit),
                ),
                decoder=json_object("candles"),
            ),
        )

    async def get_historical_funding(
        self,
        market: str,
        effective_before_or_at: str | None = None,
        effective_before_or_at_height: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_historical_funding",
            RequestSpec(
                HttpMethod.GET,
                f"historicalFunding/{market}",
                params=query_params(
                    ("effectiveBeforeOrAt", effective_before_or_at),
                    ("effectiveBeforeOrAtHeight", effective_before_or_at_height),
                    ("limit", limit),
                ),
                decoder=json_object("historicalFunding"),
            ),
        )

    async def get_sparklines(self, time_period: str) -> dict[str, Any]:
        return await self.request(
            "get_sparklines",
            RequestSpec(
                HttpMethod.GET,
                "sparklines",
                params=query_params(("timePeriod", time_period)),
                decoder=json_object(),
            ),
        )

    async def get_time(self) -> dict[str, Any]:
        return await self.request(
            "get_time", RequestSpec(HttpMethod.GET, "time", decoder=json_object("iso", "epoch"))
        )

    async def get_height(self) -> dict[str, Any]:
        return await self.request(
            "get_height",
            RequestSpec(HttpMethod.GET, "height", decoder=json_object("height", "time")),
        )

    async def get_fast_withdrawal(
        self,
        credit_asset: str | None = None,
        credit_amount: str | None = None,
        debit_amount: str | None = None,
    ) -> dict[str, Any]:
        """Get the liquidity providers available for a fast withdrawal.

        Args:
            credit_asset: Optional asset to receive (e.g. ``"USDC"``).
            credit_amount: Optional amount to receive.
            debit_amount: Optional amount to send.
        """
        return await self.request(
            "get_fast_withdrawal",
            RequestSpec(
                HttpMethod.GET,
                "fast-withdrawals",
                params=query_params(
                    ("creditAsset", credit_asset),
                    ("creditAmount", credit_amount),
                    ("debitAmount", debit_amount),
                ),
                decoder=json_object("liquidityProviders"),
            ),
        )

    async def get_stats(self, market: str, days: int | None = None) -> dict[str, Any]:
        return await self.request(
            "get_stats",
            RequestSpec(
                HttpMethod.GET,
                f"stats/{market}",
                params=query_params(("days", days)),
                decoder=json_object("markets"),
            ),
        )

    async def get_config(self) -> dict[str, Any]:
        return await self.request(
            "get_config", RequestSpec(HttpMethod.GET, "config", decoder=json_object())
        )

    async def check_if_user_exists(self, ethereum_address: str) -> dict[str, Any]:
        return await self.request(
            "check_if_user_exists",
            RequestSpec(
                HttpMethod.GET,
                "users/exists",
                params=query_params(("ethereumAddress", ethereum_address)),
                decoder=json_object("exists"),
            ),
        )

    async def check_if_username_exists(self, username: str) -> dict[str, Any]:
        return await self.request(
            "check_if_username_exists",
            RequestSpec(
                HttpMethod.GET,
                "usernames",
                params=query_params(("username", username)),
                decoder=json_object("exists"),
            ),
        )

    async def get_leaderboard_pnls(
        self,
        period: str,
        starting_before_or_at: str,
        sort_by: str,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Get the trading league leaderboard.

        Args:
            period: The leaderboard period (e.g. ``"DAILY"``).
            starting_before_or_at: ISO time of the period to rank.
            sort_by: The ranking key (e.g. ``"ABSOLUTE"``).
            limit: Optional maximum number of entries.
        """
        return await self.request(
            "get_leaderboard_pnls",
            RequestSpec(
                HttpMethod.GET,
                "leaderboard-pnl",
                params=query_params(
                    ("period", period),
                    ("startingBeforeOrAt", starting_before_or_at),
                    ("sortBy", sort_by),
                    ("limit", limit),
                ),
                decoder=json_object("topPnls"),
            ),
        )

    async def get_public_retroactive_mining_rewards(self, ethereum_address: str) -> dict[str, Any]:
        return await self.request(
            "get_public_retroactive_mining_rewards",
            RequestSpec(
                HttpMethod.GET,
                "rewards/public-retroactive-mining",
                params=query_params(("ethereumAddress", ethereum_address)),
                decoder=json_object("allocation", "targetVolume"),
            ),
        )

    async def get_currently_revealed_hedgies(self) -> dict[str, Any]:
        return await self.request(
            "get_currently_revealed_hedgies",
            RequestSpec(HttpMethod.GET, "hedgies/current", decoder=json_object("daily", "weekly")),
        )

    async def get_historically_revealed_hedgies(
        self,
        nft_reveal_type: str,
        start: int | None = None,
        end: int | None = None,
    ) -> dict[str, Any]:
        return await self.request(
            "get_historically_revealed_hedgies",
            RequestSpec(
                HttpMethod.GET,
                "hedgies/history",
                params=query_params(
                    ("nftRevealType", nft_reveal_type), ("start", start), ("end", end)
                ),
                decoder=json_object("historicalTokenIds"),
            ),
        )

    async def get_insurance_fund_balance(self) -> dict[str, Any]:
        return await self.request(
            "get_insurance_fund_balance",
            RequestSpec(HttpMethod.GET, "insurance-fund/balance", decoder=json_object("balance")),
        )

    async def get_profile(self, public_id: str) -> dict[str, Any]:
        return await self.request(
            "get_profile",
            RequestSpec(HttpMethod.GET, f"profile/{public_id}", decoder=json_object("username")),
        )

    async def verify_email(self, token: str) -> int:
        """Verify an email address.

        The call is sent once and never retried.

        Args:
            token: The verification token.

        Returns:
            The HTTP status code of the response.
        """
        return await self._request_status(
            "verify_email",
            RequestSpec(
                HttpMethod.PUT, "emails/verify-email", params=query_params(("token", token))
            ),
        )
