"""CoinGecko API client for coin prices and price history."""

from __future__ import annotations

import asyncio
import ssl
from typing import Any

import aiohttp
import certifi
import structlog

from coindash.clients.base import PriceProvider, parse_price_points
from coindash.config import DashboardConfig
from coindash.constants import DEFAULT_VS_CURRENCY
from coindash.errors import DataUnavailable, DecodeError, NetworkError, PriceDataError
from coindash.types import CoinRow, PricePoint, format_price
from coindash.utils.time import resolve_range

logger = structlog.get_logger()

# sample for chart: {base}/bitcoin/market_chart/range?vs_currency=usd&from=1735689600&to=1746403200


class CoinGeckoClient(PriceProvider):
    """Async client for the CoinGecko coins API."""

    def __init__(self, config: DashboardConfig) -> None:
        self._base_url = config.api_host.rstrip("/")
        self._coins = config.coins_list
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout_sec)
        self._session: aiohttp.ClientSession | None = None

    async def connect(self) -> None:
        ssl_ctx = ssl.create_default_context(cafile=certifi.where())
        self._session = aiohttp.ClientSession(
            connector=aiohttp.TCPConnector(ssl=ssl_ctx),
            timeout=self._timeout,
        )
        logger.info("CoinGecko client connected", url=self._base_url)

    async def close(self) -> None:
        if self._session:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> aiohttp.ClientSession:
        if self._session is None:
            raise RuntimeError("CoinGecko client not connected.")
        return self._session

    async def _get_json(self, url: str, params: dict[str, str]) -> Any:
        """Single GET; transport failures become NetworkError, bad JSON DecodeError."""
        try:
            async with self.session.get(url, params=params) as resp:
                resp.raise_for_status()
                return await resp.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError(f"request to {url} failed: {str(e) or type(e).__name__}") from e
        except ValueError as e:
            raise DecodeError(f"invalid JSON from {url}: {e}") from e

    async def fetch_coins(self) -> list[CoinRow]:
        """Fetch current USD prices for the configured coin ids."""
        params = {"vs_currency": DEFAULT_VS_CURRENCY, "ids": ",".join(self._coins)}
        try:
            data = await self._get_json(f"{self._base_url}/markets", params)
        except PriceDataError as e:
            raise DataUnavailable(f"coin list unavailable: {e}") from e

        if not isinstance(data, list):
            raise DataUnavailable("coin list response is not a list")
        rows = []
        try:
            for coin in data:
                rows.append(CoinRow(
                    name=str(coin["name"]),
                    symbol=str(coin["symbol"]).upper(),
                    price=format_price(float(coin["current_price"])),
                ))
        except (KeyError, TypeError, ValueError) as e:
            raise DataUnavailable(f"malformed coin entry: {e}") from e

        logger.info("coins.fetched", count=len(rows))
        return rows

    async def fetch_price_series(
        self, coin_id: str, start_date: str, end_date: str
    ) -> list[PricePoint]:
        """Fetch the USD price history of a coin between two MM-DD-YYYY dates."""
        start, end = resolve_range(start_date, end_date)
        url = f"{self._base_url}/{coin_id.lower()}/market_chart/range"
        params = {"vs_currency": DEFAULT_VS_CURRENCY, "from": start, "to": end}
        data = await self._get_json(url, params)
        points = parse_price_points(data, DecodeError)
        logger.debug("prices.fetched", coin=coin_id, points=len(points))
        return points
